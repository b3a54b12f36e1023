"""
Bridge deck: 52 cards, 4 suits × 13 ranks.

Text encoding (used for transport, persistence and move logs): one rank
character from ``23456789TJQKA`` followed by one suit character from
``CDHS``. "AS" is the ace of spades, "TD" the ten of diamonds.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable

from .errors import MalformedCard


class Suit(IntEnum):
    """Clubs < Diamonds < Hearts < Spades (bidding order)."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3

    @property
    def letter(self) -> str:
        return "CDHS"[self]

    @property
    def symbol(self) -> str:
        return "♣♦♥♠"[self]

    @property
    def is_major(self) -> bool:
        return self in (Suit.HEARTS, Suit.SPADES)


# Rank is a plain int: 2..10, 11=J, 12=Q, 13=K, 14=A
RANK_JACK = 11
RANK_QUEEN = 12
RANK_KING = 13
RANK_ACE = 14
RANKS = tuple(range(2, 15))

RANK_CHARS = "23456789TJQKA"
SUIT_CHARS = "CDHS"


@dataclass(frozen=True)
class Card:
    """A single playing card."""

    suit: Suit
    rank: int

    def __post_init__(self) -> None:
        if not isinstance(self.suit, Suit):
            raise MalformedCard(f"Invalid suit: {self.suit!r}")
        if not isinstance(self.rank, int) or not 2 <= self.rank <= 14:
            raise MalformedCard(f"Invalid rank: {self.rank!r}")

    @property
    def rank_char(self) -> str:
        return RANK_CHARS[self.rank - 2]

    def __str__(self) -> str:
        return f"{self.rank_char}{self.suit.letter}"

    def __repr__(self) -> str:
        return str(self)


def make_card(text: str) -> Card:
    """Alias of parse_card for readable test fixtures."""
    return parse_card(text)


def parse_card(text: str) -> Card:
    """Inverse of str(card). Case-insensitive."""
    if not isinstance(text, str) or len(text.strip()) != 2:
        raise MalformedCard(f"Invalid card string: {text!r}")
    r, s = text.strip().upper()
    if r not in RANK_CHARS or s not in SUIT_CHARS:
        raise MalformedCard(f"Invalid card string: {text!r}")
    return Card(Suit(SUIT_CHARS.index(s)), RANK_CHARS.index(r) + 2)


def parse_cards(texts: Iterable[str]) -> list[Card]:
    return [parse_card(t) for t in texts]


def make_deck_52() -> list[Card]:
    """Full deck, suit-major (clubs first), ranks ascending."""
    return [Card(s, r) for s in Suit for r in RANKS]


def card_index(card: Card) -> int:
    """Stable index 0..51 matching make_deck_52()."""
    return int(card.suit) * 13 + (card.rank - 2)


def shuffle_deck(deck: Iterable[Card], rng: random.Random | None = None) -> list[Card]:
    """
    Fisher-Yates: for i from the last index down to 1, swap i with a uniform
    j in [0, i]. Returns a new list; the input is left untouched.
    """
    if rng is None:
        rng = random.Random()
    cards = list(deck)
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randrange(i + 1)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def _suit_order(order: str) -> list[Suit]:
    o = order.upper()
    if sorted(o) != sorted(SUIT_CHARS):
        raise ValueError(f"Suit order must be a permutation of {SUIT_CHARS!r}: {order!r}")
    return [Suit(SUIT_CHARS.index(ch)) for ch in o]


def sort_hand(hand: Iterable[Card], suit_order: str = "SHDC") -> list[Card]:
    """Group by suit in ``suit_order``, ranks descending. Display only."""
    position = {s: i for i, s in enumerate(_suit_order(suit_order))}
    return sorted(hand, key=lambda c: (position[c.suit], -c.rank))


def cards_of_suit(hand: Iterable[Card], suit: Suit) -> list[Card]:
    return [c for c in hand if c.suit == suit]


def format_hand(hand: Iterable[Card], suit_order: str = "SHDC") -> str:
    """E.g. "♠ A K 7 ♥ Q 2 ♦ - ♣ J T 9 8 6 5 4 3"."""
    cards = sort_hand(hand, suit_order)
    parts: list[str] = []
    for s in _suit_order(suit_order):
        ranks = [c.rank_char for c in cards if c.suit == s]
        parts.append(f"{s.symbol} {' '.join(ranks) if ranks else '-'}")
    return " ".join(parts)


__all__ = [
    "Suit",
    "Card",
    "RANKS",
    "RANK_ACE",
    "RANK_KING",
    "RANK_QUEEN",
    "RANK_JACK",
    "make_card",
    "parse_card",
    "parse_cards",
    "make_deck_52",
    "card_index",
    "shuffle_deck",
    "sort_hand",
    "cards_of_suit",
    "format_hand",
]
