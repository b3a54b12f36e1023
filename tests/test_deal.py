"""Tests for dealing, dealer rotation and vulnerability."""
import random

import pytest

from bridge.deal import (
    BOTH_VUL,
    EW_VUL,
    NONE_VUL,
    NS_VUL,
    SIXTEEN_BOARD,
    Vulnerability,
    check_deck,
    deal_hands,
    dealer_for_board,
    next_dealer,
    shuffle_and_deal,
    vulnerability_for_board,
)
from bridge.deck import make_deck_52
from bridge.errors import InvalidBoardNumber, InvalidDeckSize
from bridge.seats import SEATS, Seat, Side


def test_deal_partitions_deck():
    deal = shuffle_and_deal(random.Random(7))
    cards = []
    for seat in SEATS:
        assert len(deal.hands[seat]) == 13
        cards.extend(deal.hands[seat])
    assert len(cards) == 52
    assert set(cards) == set(make_deck_52())


def test_deal_slices_follow_pack_order():
    deck = make_deck_52()
    deal = deal_hands(deck)
    assert deal.hands[Seat.NORTH] == tuple(deck[0:13])
    assert deal.hands[Seat.SOUTH] == tuple(deck[13:26])
    assert deal.hands[Seat.EAST] == tuple(deck[26:39])
    assert deal.hands[Seat.WEST] == tuple(deck[39:52])
    assert deal.deck == tuple(deck)


def test_deal_rejects_bad_deck():
    deck = make_deck_52()
    with pytest.raises(InvalidDeckSize):
        deal_hands(deck[:51])
    with pytest.raises(InvalidDeckSize):
        check_deck(deck[:51] + [deck[0]])


def test_dealer_rotation():
    assert [dealer_for_board(n) for n in range(1, 9)] == [
        Seat.NORTH, Seat.EAST, Seat.SOUTH, Seat.WEST,
        Seat.NORTH, Seat.EAST, Seat.SOUTH, Seat.WEST,
    ]
    assert next_dealer(Seat.WEST) is Seat.NORTH


def test_four_board_vulnerability():
    assert [vulnerability_for_board(n) for n in range(1, 6)] == [
        NONE_VUL, NS_VUL, EW_VUL, BOTH_VUL, NONE_VUL,
    ]


def test_sixteen_board_vulnerability():
    expected = {
        1: "None", 2: "NS", 3: "EW", 4: "Both",
        5: "NS", 6: "EW", 7: "Both", 8: "None",
        9: "EW", 10: "Both", 11: "None", 12: "NS",
        13: "Both", 14: "None", 15: "NS", 16: "EW",
    }
    for n, label in expected.items():
        assert vulnerability_for_board(n, SIXTEEN_BOARD).label == label
        assert vulnerability_for_board(n + 16, SIXTEEN_BOARD).label == label


def test_vulnerability_unknown_cycle():
    with pytest.raises(ValueError):
        vulnerability_for_board(1, "thirty_two")


@pytest.mark.parametrize("n", [0, -3])
def test_board_numbers_start_at_one(n):
    with pytest.raises(InvalidBoardNumber):
        dealer_for_board(n)
    with pytest.raises(InvalidBoardNumber):
        vulnerability_for_board(n)


def test_vulnerability_labels():
    assert Vulnerability.from_label("both") == BOTH_VUL
    assert Vulnerability.from_label("All") == BOTH_VUL
    assert Vulnerability.from_label("ns").for_side(Side.NS)
    assert not Vulnerability.from_label("ns").for_side(Side.EW)
    with pytest.raises(ValueError):
        Vulnerability.from_label("everyone")
