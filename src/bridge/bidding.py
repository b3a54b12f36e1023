"""
Auction (bidding): bids, calls, the auction state machine and contract.

Order of bids: higher level wins; at equal level C < D < H < S < NT.
The auction starts with the dealer and proceeds clockwise, one call per seat.
It ends after at least four calls when the last three are passes: four
passes with no bid means the board is passed out, otherwise the last bid
becomes the contract.

Text encoding: bids "1C".."7NT"; calls "P", "X", "XX" (the long forms
"PASS", "DOUBLE", "REDOUBLE" are accepted on input).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import NamedTuple, Sequence

from .deck import Suit
from .errors import (
    AlreadyDoubled,
    BidTooLow,
    CannotDoubleOwnSide,
    CannotRedoubleOpponent,
    MalformedBid,
    MalformedCall,
    NothingDoubled,
    NothingToDouble,
    OutOfTurn,
    WrongPhase,
)
from .seats import Seat, check_seat, next_seat, partner, same_side, side_of


class Strain(IntEnum):
    """Denomination of a bid, in bidding order."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3
    NOTRUMP = 4

    @property
    def letter(self) -> str:
        return STRAIN_TEXT[self]

    @property
    def trump(self) -> Suit | None:
        """Trump suit for play, None for no-trump."""
        if self is Strain.NOTRUMP:
            return None
        return Suit(int(self))

    @property
    def is_minor(self) -> bool:
        return self in (Strain.CLUBS, Strain.DIAMONDS)

    @property
    def is_major(self) -> bool:
        return self in (Strain.HEARTS, Strain.SPADES)


STRAIN_TEXT = ("C", "D", "H", "S", "NT")


@dataclass(frozen=True, order=True)
class Bid:
    """Level 1..7 plus strain. Field order gives the bidding order."""

    level: int
    strain: Strain

    def __post_init__(self) -> None:
        if not isinstance(self.strain, Strain):
            raise MalformedBid(f"Invalid strain: {self.strain!r}")
        if not isinstance(self.level, int) or not 1 <= self.level <= 7:
            raise MalformedBid(f"Invalid bid level: {self.level!r}")

    @property
    def tricks_required(self) -> int:
        return 6 + self.level

    def __str__(self) -> str:
        return f"{self.level}{self.strain.letter}"

    def __repr__(self) -> str:
        return str(self)


ALL_BIDS: tuple[Bid, ...] = tuple(Bid(level, s) for level in range(1, 8) for s in Strain)


def parse_bid(text: str) -> Bid:
    """"4H" -> Bid(4, HEARTS); "3NT" (or "3N") -> Bid(3, NOTRUMP)."""
    if not isinstance(text, str):
        raise MalformedBid(f"Invalid bid string: {text!r}")
    t = text.strip().upper()
    if len(t) < 2 or not t[0].isdigit():
        raise MalformedBid(f"Invalid bid string: {text!r}")
    strain_text = t[1:]
    if strain_text == "N":
        strain_text = "NT"
    if strain_text not in STRAIN_TEXT:
        raise MalformedBid(f"Invalid bid string: {text!r}")
    return Bid(int(t[0]), Strain(STRAIN_TEXT.index(strain_text)))


class CallKind(str, Enum):
    BID = "BID"
    PASS = "PASS"
    DOUBLE = "DOUBLE"
    REDOUBLE = "REDOUBLE"


@dataclass(frozen=True)
class Call:
    """
    One bidding-turn action. Either:
    - BID with a Bid
    - PASS / DOUBLE / REDOUBLE with no bid
    """

    kind: CallKind
    bid: Bid | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, CallKind):
            raise MalformedCall(f"Unknown call kind: {self.kind!r}")
        if self.kind is CallKind.BID:
            if not isinstance(self.bid, Bid):
                raise MalformedCall("A bid call needs a Bid")
        elif self.bid is not None:
            raise MalformedCall(f"{self.kind.value} must not carry a bid")

    @property
    def is_bid(self) -> bool:
        return self.kind is CallKind.BID

    @property
    def is_pass(self) -> bool:
        return self.kind is CallKind.PASS

    def __str__(self) -> str:
        if self.kind is CallKind.BID:
            return str(self.bid)
        return _CALL_TEXT[self.kind]

    def __repr__(self) -> str:
        return str(self)


_CALL_TEXT = {CallKind.PASS: "P", CallKind.DOUBLE: "X", CallKind.REDOUBLE: "XX"}
_CALL_ALIASES = {
    "P": CallKind.PASS,
    "PASS": CallKind.PASS,
    "X": CallKind.DOUBLE,
    "DOUBLE": CallKind.DOUBLE,
    "XX": CallKind.REDOUBLE,
    "REDOUBLE": CallKind.REDOUBLE,
}

PASS = Call(CallKind.PASS)
DOUBLE = Call(CallKind.DOUBLE)
REDOUBLE = Call(CallKind.REDOUBLE)


def make_bid(level: int, strain: Strain) -> Call:
    return Call(CallKind.BID, Bid(level, strain))


def parse_call(text: str) -> Call:
    """Inverse of str(call)."""
    if not isinstance(text, str):
        raise MalformedCall(f"Invalid call string: {text!r}")
    t = text.strip().upper()
    kind = _CALL_ALIASES.get(t)
    if kind is not None:
        return Call(kind)
    try:
        return Call(CallKind.BID, parse_bid(t))
    except MalformedBid:
        raise MalformedCall(f"Invalid call string: {text!r}") from None


class AuctionEntry(NamedTuple):
    seat: Seat
    call: Call


Auction = tuple[AuctionEntry, ...]


@dataclass(frozen=True)
class Contract:
    """Final contract. ``redoubled`` implies ``doubled``; scoring reads redoubled first."""

    level: int
    strain: Strain
    declarer: Seat
    doubled: bool = False
    redoubled: bool = False

    def __post_init__(self) -> None:
        Bid(self.level, self.strain)  # validates level/strain
        if self.redoubled and not self.doubled:
            raise MalformedBid("A redoubled contract must also be doubled")

    @property
    def bid(self) -> Bid:
        return Bid(self.level, self.strain)

    @property
    def dummy(self) -> Seat:
        return partner(self.declarer)

    @property
    def trump(self) -> Suit | None:
        return self.strain.trump

    @property
    def tricks_required(self) -> int:
        return 6 + self.level

    @property
    def opening_leader(self) -> Seat:
        return next_seat(self.declarer)

    @property
    def risk_text(self) -> str:
        if self.redoubled:
            return "XX"
        if self.doubled:
            return "X"
        return ""

    def __str__(self) -> str:
        return f"{self.level}{self.strain.letter}{self.risk_text} by {self.declarer.name}"


_CONTRACT_RE = re.compile(r"^([1-7](?:NT|N|C|D|H|S))(X{0,2})$")


def parse_contract(text: str, declarer: Seat) -> Contract:
    """"4H", "3NTX", "6SXX" -> Contract."""
    if not isinstance(text, str):
        raise MalformedBid(f"Invalid contract string: {text!r}")
    m = _CONTRACT_RE.match(text.strip().upper())
    if m is None:
        raise MalformedBid(f"Invalid contract string: {text!r}")
    bid = parse_bid(m.group(1))
    risk = m.group(2)
    return Contract(bid.level, bid.strain, declarer, doubled=bool(risk), redoubled=risk == "XX")


class AuctionStatus(NamedTuple):
    """What the auction so far implies."""
    last_bid: Bid | None
    last_bidder: Seat | None
    doubled: bool
    redoubled: bool
    doubler: Seat | None
    complete: bool
    passed_out: bool


def is_auction_complete(auction: Sequence[AuctionEntry]) -> bool:
    """At least four calls and the last three are passes."""
    if len(auction) < 4:
        return False
    return all(e.call.is_pass for e in auction[-3:])


def auction_status(auction: Sequence[AuctionEntry]) -> AuctionStatus:
    last_bid: Bid | None = None
    last_bidder: Seat | None = None
    doubled = False
    redoubled = False
    doubler: Seat | None = None
    for seat, call in auction:
        if call.kind is CallKind.BID:
            last_bid = call.bid
            last_bidder = seat
            doubled = redoubled = False
            doubler = None
        elif call.kind is CallKind.DOUBLE:
            doubled = True
            doubler = seat
        elif call.kind is CallKind.REDOUBLE:
            redoubled = True
    complete = is_auction_complete(auction)
    return AuctionStatus(
        last_bid=last_bid,
        last_bidder=last_bidder,
        doubled=doubled,
        redoubled=redoubled,
        doubler=doubler,
        complete=complete,
        passed_out=complete and last_bid is None,
    )


def seat_to_call(auction: Sequence[AuctionEntry], dealer: Seat) -> Seat:
    """Dealer advanced once per call made."""
    return next_seat(dealer, len(auction))


def validate_call(
    auction: Sequence[AuctionEntry],
    dealer: Seat,
    seat: Seat,
    call: Call,
) -> None:
    """Raise the matching auction error if ``seat`` may not make ``call`` now."""
    seat = check_seat(seat)
    if not isinstance(call, Call):
        raise MalformedCall(f"Not a call: {call!r}")
    status = auction_status(auction)
    if status.complete:
        raise WrongPhase("The auction is over")
    expected = seat_to_call(auction, dealer)
    if seat != expected:
        raise OutOfTurn(f"It is {expected.name}'s turn to call, not {seat.name}'s")

    if call.kind is CallKind.BID:
        if status.last_bid is not None and not call.bid > status.last_bid:
            raise BidTooLow(f"{call.bid} is not higher than {status.last_bid}")
        return

    if call.kind is CallKind.PASS:
        return

    if call.kind is CallKind.DOUBLE:
        if status.last_bid is None or status.last_bidder is None:
            raise NothingToDouble("There is no bid to double")
        if status.doubled or status.redoubled:
            raise AlreadyDoubled(f"{status.last_bid} is already doubled")
        if same_side(seat, status.last_bidder):
            raise CannotDoubleOwnSide("Cannot double your own side's bid")
        return

    # REDOUBLE
    if not status.doubled or status.redoubled or status.doubler is None:
        raise NothingDoubled("There is no doubled bid to redouble")
    if same_side(seat, status.doubler):
        raise CannotRedoubleOpponent("Only the side that was doubled may redouble")


def apply_call(
    auction: Sequence[AuctionEntry],
    dealer: Seat,
    seat: Seat,
    call: Call,
) -> Auction:
    """Validate and append. Returns a new auction tuple."""
    seat = check_seat(seat)
    validate_call(auction, dealer, seat, call)
    return tuple(auction) + (AuctionEntry(seat, call),)


def legal_calls(auction: Sequence[AuctionEntry], dealer: Seat) -> list[Call]:
    """Every call the seat on turn may make (empty once the auction is over)."""
    if is_auction_complete(auction):
        return []
    seat = seat_to_call(auction, dealer)
    status = auction_status(auction)
    calls = [PASS]
    if (
        status.last_bid is not None
        and status.last_bidder is not None
        and not status.doubled
        and not same_side(seat, status.last_bidder)
    ):
        calls.append(DOUBLE)
    if (
        status.doubled
        and not status.redoubled
        and status.doubler is not None
        and not same_side(seat, status.doubler)
    ):
        calls.append(REDOUBLE)
    for bid in ALL_BIDS:
        if status.last_bid is None or bid > status.last_bid:
            calls.append(Call(CallKind.BID, bid))
    return calls


def determine_contract(auction: Sequence[AuctionEntry]) -> Contract | None:
    """
    Contract for a completed auction, None if incomplete or passed out.
    Declarer: the first player of the final bidder's side to name the
    final strain, scanning from the start of the auction.
    """
    status = auction_status(auction)
    if not status.complete or status.last_bid is None or status.last_bidder is None:
        return None
    final = status.last_bid
    declaring_side = side_of(status.last_bidder)
    declarer = status.last_bidder
    for seat, call in auction:
        if (
            call.kind is CallKind.BID
            and call.bid is not None
            and call.bid.strain == final.strain
            and side_of(seat) is declaring_side
        ):
            declarer = seat
            break
    return Contract(
        level=final.level,
        strain=final.strain,
        declarer=declarer,
        doubled=status.doubled or status.redoubled,
        redoubled=status.redoubled,
    )


__all__ = [
    "Strain",
    "Bid",
    "ALL_BIDS",
    "parse_bid",
    "CallKind",
    "Call",
    "PASS",
    "DOUBLE",
    "REDOUBLE",
    "make_bid",
    "parse_call",
    "AuctionEntry",
    "Auction",
    "Contract",
    "parse_contract",
    "AuctionStatus",
    "is_auction_complete",
    "auction_status",
    "seat_to_call",
    "validate_call",
    "apply_call",
    "legal_calls",
    "determine_contract",
]
