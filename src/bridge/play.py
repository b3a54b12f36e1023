"""
Trick-taking: follow-suit legality and trick winner.
Must follow the led suit when able; otherwise any card. The highest trump
wins if any trump was played, else the highest card of the led suit.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .deck import Card, Suit
from .errors import CardNotInHand, EmptyTrick, MustFollowSuit
from .seats import Seat, next_seat


@dataclass(frozen=True)
class Trick:
    # (seat, card) pairs in play order
    plays: tuple[tuple[Seat, Card], ...] = ()
    winner: Seat | None = None

    @property
    def led_suit(self) -> Suit | None:
        if not self.plays:
            return None
        return self.plays[0][1].suit

    @property
    def leader(self) -> Seat | None:
        if not self.plays:
            return None
        return self.plays[0][0]

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(c for _, c in self.plays)

    @property
    def is_complete(self) -> bool:
        return len(self.plays) == 4

    def next_to_play(self) -> Seat | None:
        """Seat after the last one to play; None for an empty trick."""
        if not self.plays:
            return None
        return next_seat(self.plays[-1][0])

    def with_play(self, seat: Seat, card: Card) -> "Trick":
        return Trick(plays=self.plays + ((seat, card),))


EMPTY_TRICK = Trick()


def has_suit(hand: Iterable[Card], suit: Suit) -> bool:
    return any(c.suit == suit for c in hand)


def validate_play(card: Card, hand: Iterable[Card], trick: Trick) -> None:
    """Raise CardNotInHand or MustFollowSuit if ``card`` cannot be played."""
    cards = list(hand)
    if card not in cards:
        raise CardNotInHand(f"{card} is not in hand")
    led = trick.led_suit
    if led is None:
        return
    if card.suit != led and has_suit(cards, led):
        raise MustFollowSuit(f"Must follow suit: {led.letter}")


def legal_plays(hand: Iterable[Card], trick: Trick) -> list[Card]:
    """Cards from ``hand`` that may be played to ``trick``."""
    cards = list(hand)
    led = trick.led_suit
    if led is None:
        return cards
    follow = [c for c in cards if c.suit == led]
    return follow if follow else cards


def trick_winner(trick: Trick, trump: Suit | None) -> Seat:
    """
    Seat that wins ``trick`` (complete or not).
    trump is None for no-trump contracts.
    """
    if not trick.plays:
        raise EmptyTrick("Cannot determine winner of an empty trick")

    if trump is not None:
        trumps = [(seat, c) for seat, c in trick.plays if c.suit == trump]
        if trumps:
            return max(trumps, key=lambda p: p[1].rank)[0]

    led = trick.led_suit
    followers = [(seat, c) for seat, c in trick.plays if c.suit == led]
    return max(followers, key=lambda p: p[1].rank)[0]


__all__ = [
    "Trick",
    "EMPTY_TRICK",
    "has_suit",
    "validate_play",
    "legal_plays",
    "trick_winner",
]
