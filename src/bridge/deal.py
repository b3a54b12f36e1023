"""
Dealing and board rotation.

Deal: NORTH gets cards 0-12 of the shuffled pack, SOUTH 13-25, EAST 26-38,
WEST 39-51. Dealer and vulnerability come from the 1-based board number.
"""
from __future__ import annotations

import random
from typing import NamedTuple, Sequence

from .deck import Card, make_deck_52, shuffle_deck
from .errors import InvalidBoardNumber, InvalidDeckSize
from .seats import SEATS, Seat, Side

# Slice of the shuffled pack for each seat.
DEAL_SLICES: dict[Seat, slice] = {
    Seat.NORTH: slice(0, 13),
    Seat.SOUTH: slice(13, 26),
    Seat.EAST: slice(26, 39),
    Seat.WEST: slice(39, 52),
}

FOUR_BOARD = "four_board"
SIXTEEN_BOARD = "sixteen_board"
VULNERABILITY_CYCLES = (FOUR_BOARD, SIXTEEN_BOARD)


class Vulnerability(NamedTuple):
    ns: bool = False
    ew: bool = False

    def for_side(self, side: Side) -> bool:
        return self.ns if side is Side.NS else self.ew

    @property
    def label(self) -> str:
        """"None", "NS", "EW" or "Both"."""
        if self.ns and self.ew:
            return "Both"
        if self.ns:
            return "NS"
        if self.ew:
            return "EW"
        return "None"

    @classmethod
    def from_label(cls, label: str) -> "Vulnerability":
        key = label.strip().lower()
        table = {
            "none": cls(False, False),
            "ns": cls(True, False),
            "ew": cls(False, True),
            "both": cls(True, True),
            "all": cls(True, True),
        }
        if key not in table:
            raise ValueError(f"Unknown vulnerability: {label!r}")
        return table[key]


NONE_VUL = Vulnerability(False, False)
NS_VUL = Vulnerability(True, False)
EW_VUL = Vulnerability(False, True)
BOTH_VUL = Vulnerability(True, True)

# Position in the 4-board cycle -> vulnerability
_FOUR_BOARD_TABLE = (NONE_VUL, NS_VUL, EW_VUL, BOTH_VUL)

# ACBL 16-board table, keyed by board_number % 16
_SIXTEEN_BOARD_TABLE: dict[int, Vulnerability] = {}
for _n in (1, 8, 11, 14):
    _SIXTEEN_BOARD_TABLE[_n] = NONE_VUL
for _n in (2, 5, 12, 15):
    _SIXTEEN_BOARD_TABLE[_n] = NS_VUL
for _n in (3, 6, 9, 0):
    _SIXTEEN_BOARD_TABLE[_n] = EW_VUL
for _n in (4, 7, 10, 13):
    _SIXTEEN_BOARD_TABLE[_n] = BOTH_VUL


class Deal(NamedTuple):
    """Result of a deal. Hands are in pack order; sort with sort_hand for display."""
    hands: dict[Seat, tuple[Card, ...]]
    deck: tuple[Card, ...]


def _check_board_number(board_number: int) -> None:
    if not isinstance(board_number, int) or board_number < 1:
        raise InvalidBoardNumber(f"Board numbers start at 1, got {board_number!r}")


def check_deck(deck: Sequence[Card]) -> None:
    """Raise InvalidDeckSize unless ``deck`` is exactly the 52 distinct cards."""
    if len(deck) != 52:
        raise InvalidDeckSize(f"Deck must have exactly 52 cards, got {len(deck)}")
    if len(set(deck)) != 52:
        raise InvalidDeckSize("Deck contains duplicate cards")


def deal_hands(shuffled: Sequence[Card]) -> Deal:
    """Split a shuffled pack into four 13-card hands."""
    check_deck(shuffled)
    pack = tuple(shuffled)
    hands = {seat: pack[DEAL_SLICES[seat]] for seat in SEATS}
    return Deal(hands=hands, deck=pack)


def shuffle_and_deal(rng: random.Random | None = None) -> Deal:
    return deal_hands(shuffle_deck(make_deck_52(), rng))


def dealer_for_board(board_number: int) -> Seat:
    """Board 1: N, 2: E, 3: S, 4: W, then repeat."""
    _check_board_number(board_number)
    return SEATS[(board_number - 1) % 4]


def vulnerability_for_board(board_number: int, cycle: str = FOUR_BOARD) -> Vulnerability:
    """
    four_board: board 1 none, 2 NS, 3 EW, 4 both, repeating.
    sixteen_board: the ACBL duplicate table.
    """
    _check_board_number(board_number)
    if cycle == FOUR_BOARD:
        return _FOUR_BOARD_TABLE[(board_number - 1) % 4]
    if cycle == SIXTEEN_BOARD:
        return _SIXTEEN_BOARD_TABLE[board_number % 16]
    raise ValueError(f"Unknown vulnerability cycle: {cycle!r}")


def next_dealer(dealer: Seat) -> Seat:
    """Dealer rotates clockwise (N -> E -> S -> W -> N)."""
    return Seat((int(dealer) + 1) % 4)


__all__ = [
    "Deal",
    "Vulnerability",
    "NONE_VUL",
    "NS_VUL",
    "EW_VUL",
    "BOTH_VUL",
    "FOUR_BOARD",
    "SIXTEEN_BOARD",
    "VULNERABILITY_CYCLES",
    "check_deck",
    "deal_hands",
    "shuffle_and_deal",
    "dealer_for_board",
    "vulnerability_for_board",
    "next_dealer",
]
