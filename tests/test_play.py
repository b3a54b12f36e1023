"""Tests for follow-suit legality and trick winners."""
import pytest

from bridge.deck import Suit, make_card, parse_cards
from bridge.errors import CardNotInHand, EmptyTrick, MustFollowSuit
from bridge.play import EMPTY_TRICK, Trick, legal_plays, trick_winner, validate_play
from bridge.seats import Seat


def _trick(*plays):
    trick = EMPTY_TRICK
    for seat, text in plays:
        trick = trick.with_play(seat, make_card(text))
    return trick


def test_trick_accessors():
    trick = _trick((Seat.WEST, "7C"), (Seat.NORTH, "KC"))
    assert trick.leader is Seat.WEST
    assert trick.led_suit is Suit.CLUBS
    assert trick.next_to_play() is Seat.EAST
    assert not trick.is_complete
    assert EMPTY_TRICK.led_suit is None
    assert EMPTY_TRICK.next_to_play() is None


def test_any_card_may_lead():
    hand = parse_cards(["AS", "2H", "3D"])
    assert legal_plays(hand, EMPTY_TRICK) == hand
    validate_play(make_card("2H"), hand, EMPTY_TRICK)


def test_must_follow_suit():
    hand = parse_cards(["AS", "2H", "3H"])
    trick = _trick((Seat.NORTH, "KH"))
    assert legal_plays(hand, trick) == parse_cards(["2H", "3H"])
    with pytest.raises(MustFollowSuit):
        validate_play(make_card("AS"), hand, trick)
    validate_play(make_card("3H"), hand, trick)


def test_void_may_discard_or_ruff():
    hand = parse_cards(["AS", "2D"])
    trick = _trick((Seat.NORTH, "KH"))
    assert legal_plays(hand, trick) == hand
    validate_play(make_card("2D"), hand, trick)


def test_card_not_in_hand():
    with pytest.raises(CardNotInHand):
        validate_play(make_card("AS"), parse_cards(["KS"]), EMPTY_TRICK)


def test_highest_of_led_suit_wins_without_trump():
    trick = _trick((Seat.NORTH, "7C"), (Seat.EAST, "KC"), (Seat.SOUTH, "AD"), (Seat.WEST, "3C"))
    assert trick_winner(trick, None) is Seat.EAST
    assert trick_winner(trick, Suit.HEARTS) is Seat.EAST


def test_trump_beats_led_suit():
    trick = _trick((Seat.NORTH, "7C"), (Seat.EAST, "KC"), (Seat.SOUTH, "2D"), (Seat.WEST, "3D"))
    assert trick_winner(trick, Suit.DIAMONDS) is Seat.WEST


def test_led_trump_suit():
    trick = _trick((Seat.NORTH, "2S"), (Seat.EAST, "AH"), (Seat.SOUTH, "3S"))
    assert trick_winner(trick, Suit.SPADES) is Seat.SOUTH


def test_empty_trick_has_no_winner():
    with pytest.raises(EmptyTrick):
        trick_winner(EMPTY_TRICK, None)
    with pytest.raises(EmptyTrick):
        trick_winner(Trick(), Suit.CLUBS)
