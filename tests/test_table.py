"""Tests for the BoardTable wrapper: serialized writes, versions and sinks."""
import threading

import pytest

from bridge.bidding import PASS, Strain, make_bid
from bridge.errors import BidTooLow, MalformedSeat, OutOfTurn, StaleState
from bridge.game import (
    AuctionClosed,
    BoardScored,
    CallMade,
    Phase,
    PlayCard,
    deal_board,
    default_action,
)
from bridge.table import BoardTable, EventSink
from bridge.seats import Seat


class RecordingSink:
    def __init__(self):
        self.received = []

    def publish(self, board_number, version, events):
        self.received.append((board_number, version, events))


def test_recording_sink_is_event_sink():
    assert isinstance(RecordingSink(), EventSink)


def test_submit_bumps_version_and_publishes():
    sink = RecordingSink()
    table = BoardTable(deal_board(1, rng_seed=8), sinks=[sink])
    assert table.version == 0
    state = table.submit(Seat.NORTH, make_bid(1, Strain.SPADES))
    assert table.version == 1
    assert table.state is state
    assert sink.received == [(1, 1, (CallMade(Seat.NORTH, make_bid(1, Strain.SPADES)),))]


def test_stale_writer_rejected():
    table = BoardTable(deal_board(1, rng_seed=8))
    _, seen = table.snapshot()
    table.submit(Seat.NORTH, PASS, expected_version=seen)
    with pytest.raises(StaleState):
        table.submit(Seat.EAST, PASS, expected_version=seen)
    assert table.version == 1
    assert len(table.state.auction) == 1


def test_rejected_action_leaves_table_unchanged():
    sink = RecordingSink()
    table = BoardTable(deal_board(1, rng_seed=8), sinks=[sink])
    table.submit(Seat.NORTH, make_bid(2, Strain.CLUBS))
    before = table.state
    with pytest.raises(OutOfTurn):
        table.submit(Seat.SOUTH, PASS)
    with pytest.raises(BidTooLow):
        table.submit(Seat.EAST, make_bid(1, Strain.NOTRUMP))
    assert table.state is before
    assert table.version == 1
    assert len(sink.received) == 1


def test_board_is_scored_when_play_ends():
    sink = RecordingSink()
    table = BoardTable(deal_board(4, rng_seed=12))
    table.subscribe(sink)
    for call in [make_bid(4, Strain.HEARTS), PASS, PASS, PASS]:
        table.submit(table.state.turn, call)
    assert any(isinstance(e, AuctionClosed) for e in sink.received[-1][2])
    while table.state.phase is Phase.PLAYING:
        table.submit(table.state.turn, default_action(table.state))
    assert table.state.phase is Phase.COMPLETED
    assert table.state.result is not None
    last_events = sink.received[-1][2]
    assert last_events[-1] == BoardScored(table.state.result)
    assert table.version == 4 + 52


def test_submit_default_on_timeout():
    table = BoardTable(deal_board(1, rng_seed=8))
    state = table.submit_default(Seat.NORTH)
    assert state.auction[-1].call == PASS
    for _ in range(3):
        table.submit_default(table.state.turn)
    assert table.state.phase is Phase.COMPLETED
    assert table.state.is_passed_out


def test_submit_default_in_play():
    table = BoardTable(deal_board(1, rng_seed=8))
    for call in [make_bid(1, Strain.CLUBS), PASS, PASS, PASS]:
        table.submit(table.state.turn, call)
    leader = table.state.turn
    expected = default_action(table.state)
    state = table.submit_default(leader)
    assert state.current_trick.plays == ((leader, expected.card),)
    assert isinstance(expected, PlayCard)


def test_concurrent_writers_serialized():
    table = BoardTable(deal_board(1, rng_seed=8))
    _, seen = table.snapshot()
    results = []

    def writer():
        try:
            table.submit(Seat.NORTH, PASS, expected_version=seen)
            results.append("ok")
        except (StaleState, OutOfTurn):
            results.append("rejected")

    threads = [threading.Thread(target=writer) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results.count("ok") == 1
    assert results.count("rejected") == 7
    assert table.version == 1


class FailingSink:
    def publish(self, board_number, version, events):
        raise RuntimeError("socket closed")


def test_failing_sink_does_not_undo_or_starve(caplog):
    good = RecordingSink()
    table = BoardTable(deal_board(1, rng_seed=8), sinks=[FailingSink(), good])
    with caplog.at_level("ERROR", logger="bridge.table"):
        state = table.submit(Seat.NORTH, PASS)
    assert table.version == 1
    assert table.state is state
    assert state.auction[-1].call == PASS
    assert good.received == [(1, 1, (CallMade(Seat.NORTH, PASS),))]
    assert "event sink" in caplog.text


def test_table_rejects_malformed_seat():
    table = BoardTable(deal_board(1, rng_seed=8))
    with pytest.raises(MalformedSeat):
        table.submit("NORTH", PASS)
    with pytest.raises(MalformedSeat):
        table.submit_default(9)
    assert table.version == 0
