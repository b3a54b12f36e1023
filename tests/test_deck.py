"""Tests for cards, the deck and hand sorting."""
import random

import pytest

from bridge.deck import (
    Card,
    Suit,
    card_index,
    cards_of_suit,
    format_hand,
    make_deck_52,
    parse_card,
    parse_cards,
    shuffle_deck,
    sort_hand,
)
from bridge.errors import InvariantViolation, MalformedCard


def test_deck_52_distinct():
    deck = make_deck_52()
    assert len(deck) == 52
    assert len(set(deck)) == 52
    assert [card_index(c) for c in deck] == list(range(52))


def test_card_text_round_trip():
    for card in make_deck_52():
        assert parse_card(str(card)) == card
    assert str(Card(Suit.SPADES, 14)) == "AS"
    assert str(Card(Suit.DIAMONDS, 10)) == "TD"
    assert parse_card("qh") == Card(Suit.HEARTS, 12)


@pytest.mark.parametrize("text", ["", "A", "1S", "AX", "10S", "ASX", None])
def test_parse_card_rejects_garbage(text):
    with pytest.raises(MalformedCard):
        parse_card(text)


def test_malformed_card_is_invariant_and_value_error():
    with pytest.raises(ValueError):
        Card(Suit.CLUBS, 15)
    with pytest.raises(InvariantViolation):
        Card(2, 5)


def test_shuffle_is_permutation_and_pure():
    deck = make_deck_52()
    before = list(deck)
    shuffled = shuffle_deck(deck, random.Random(1))
    assert deck == before
    assert sorted(shuffled, key=card_index) == deck
    assert shuffled != deck


def test_shuffle_deterministic_with_seed():
    a = shuffle_deck(make_deck_52(), random.Random(99))
    b = shuffle_deck(make_deck_52(), random.Random(99))
    assert a == b


def test_sort_hand_default_order():
    hand = parse_cards(["2C", "AS", "KH", "3S", "TD", "AC"])
    assert [str(c) for c in sort_hand(hand)] == ["AS", "3S", "KH", "TD", "AC", "2C"]


def test_sort_hand_custom_order():
    hand = parse_cards(["2C", "AS", "KH"])
    assert [str(c) for c in sort_hand(hand, "CDHS")] == ["2C", "KH", "AS"]
    with pytest.raises(ValueError):
        sort_hand(hand, "SSHD")


def test_cards_of_suit_and_format():
    hand = parse_cards(["AS", "KS", "2H", "JC"])
    assert cards_of_suit(hand, Suit.SPADES) == parse_cards(["AS", "KS"])
    assert format_hand(hand) == "♠ A K ♥ 2 ♦ - ♣ J"
