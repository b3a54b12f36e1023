"""
Seats and partnerships. Clockwise order N -> E -> S -> W -> N.
Sides and partners come only from the seat layout: NS = {N, S}, EW = {E, W}.
"""
from __future__ import annotations

from enum import Enum, IntEnum

from .errors import MalformedSeat


class Seat(IntEnum):
    """Seat values follow clockwise order so (seat + k) % 4 walks the table."""
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def letter(self) -> str:
        return self.name[0]

    def __str__(self) -> str:
        return self.name


class Side(str, Enum):
    NS = "NS"
    EW = "EW"

    @property
    def other(self) -> "Side":
        return Side.EW if self is Side.NS else Side.NS

    @property
    def seats(self) -> tuple[Seat, Seat]:
        if self is Side.NS:
            return (Seat.NORTH, Seat.SOUTH)
        return (Seat.EAST, Seat.WEST)

    def __str__(self) -> str:
        return self.value


SEATS: tuple[Seat, ...] = (Seat.NORTH, Seat.EAST, Seat.SOUTH, Seat.WEST)


def next_seat(seat: Seat, steps: int = 1) -> Seat:
    """Seat ``steps`` places clockwise."""
    return Seat((int(seat) + steps) % 4)


def left_hand_opponent(seat: Seat) -> Seat:
    return next_seat(seat, 1)


def partner(seat: Seat) -> Seat:
    return next_seat(seat, 2)


def side_of(seat: Seat) -> Side:
    return Side.NS if seat in (Seat.NORTH, Seat.SOUTH) else Side.EW


def same_side(a: Seat, b: Seat) -> bool:
    return side_of(a) is side_of(b)


def parse_seat(text: str) -> Seat:
    """Accepts "N", "north", "NORTH", ..."""
    t = text.strip().upper()
    for seat in SEATS:
        if t in (seat.name, seat.letter):
            return seat
    raise ValueError(f"Unknown seat: {text!r}")


def check_seat(seat: object) -> Seat:
    """Seat for an engine entry point: a Seat, or an int 0..3. Anything else is MalformedSeat."""
    if isinstance(seat, Seat):
        return seat
    if isinstance(seat, int) and not isinstance(seat, bool) and 0 <= seat <= 3:
        return Seat(seat)
    raise MalformedSeat(f"Not a seat: {seat!r}")


def parse_side(text: str) -> Side:
    t = text.strip().upper()
    try:
        return Side(t)
    except ValueError:
        raise ValueError(f"Unknown side: {text!r}") from None


__all__ = [
    "Seat",
    "Side",
    "SEATS",
    "next_seat",
    "left_hand_opponent",
    "partner",
    "side_of",
    "same_side",
    "check_seat",
    "parse_seat",
    "parse_side",
]
