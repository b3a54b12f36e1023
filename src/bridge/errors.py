"""
Error taxonomy for the bridge engine.

Three families, matching how the surrounding service should react:

- ProtocolError: the caller let an invalid request through (wrong seat,
  wrong phase, stale state). Reject the action, state unchanged.
- LegalityError: a game-rule violation by a player. Reject with the message,
  state unchanged; the player corrects their input.
- InvariantViolation: corrupted input or a bug in the caller. Fatal to the
  board; halt and flag it for investigation.

Every concrete error has a stable ``code`` (e.g. "BidTooLow") suitable for
API payloads and logs.
"""
from __future__ import annotations


class BridgeError(Exception):
    """Base class for every error raised by the engine."""

    code = "BridgeError"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)
        self.message = message or self.code

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "kind": error_kind(self), "message": self.message}


class ProtocolError(BridgeError):
    code = "ProtocolError"


class LegalityError(BridgeError):
    code = "LegalityError"


class InvariantViolation(BridgeError):
    code = "InvariantViolation"


# ---- Protocol ----

class OutOfTurn(ProtocolError):
    code = "OutOfTurn"


class WrongPhase(ProtocolError):
    code = "WrongPhase"


class StaleState(ProtocolError):
    code = "StaleState"


# ---- Legality: auction ----

class BidTooLow(LegalityError):
    code = "BidTooLow"


class NothingToDouble(LegalityError):
    code = "NothingToDouble"


class AlreadyDoubled(LegalityError):
    code = "AlreadyDoubled"


class CannotDoubleOwnSide(LegalityError):
    code = "CannotDoubleOwnSide"


class NothingDoubled(LegalityError):
    code = "NothingDoubled"


class CannotRedoubleOpponent(LegalityError):
    code = "CannotRedoubleOpponent"


# ---- Legality: play ----

class CardNotInHand(LegalityError):
    code = "CardNotInHand"


class MustFollowSuit(LegalityError):
    code = "MustFollowSuit"


# ---- Invariants ----

class InvalidDeckSize(InvariantViolation):
    code = "InvalidDeckSize"


class EmptyTrick(InvariantViolation):
    code = "EmptyTrick"


class CardConservationError(InvariantViolation):
    code = "CardConservationError"


class MalformedCard(InvariantViolation, ValueError):
    code = "MalformedCard"


class MalformedBid(InvariantViolation, ValueError):
    code = "MalformedBid"


class MalformedCall(InvariantViolation, ValueError):
    code = "MalformedCall"


class InvalidBoardNumber(InvariantViolation, ValueError):
    code = "InvalidBoardNumber"


class MalformedSeat(InvariantViolation, ValueError):
    code = "MalformedSeat"


class InvalidTrickCount(InvariantViolation, ValueError):
    code = "InvalidTrickCount"


class InconsistentState(InvariantViolation):
    """A GameState whose fields contradict its phase (e.g. PLAYING with no contract)."""

    code = "InconsistentState"


def error_kind(error: BaseException) -> str:
    """"protocol", "legality", "invariant", or "unknown"."""
    if isinstance(error, ProtocolError):
        return "protocol"
    if isinstance(error, LegalityError):
        return "legality"
    if isinstance(error, InvariantViolation):
        return "invariant"
    return "unknown"


def is_fatal(error: BaseException) -> bool:
    """True if the board should be halted rather than the action just rejected."""
    return isinstance(error, InvariantViolation)


__all__ = [
    "BridgeError",
    "ProtocolError",
    "LegalityError",
    "InvariantViolation",
    "OutOfTurn",
    "WrongPhase",
    "StaleState",
    "BidTooLow",
    "NothingToDouble",
    "AlreadyDoubled",
    "CannotDoubleOwnSide",
    "NothingDoubled",
    "CannotRedoubleOpponent",
    "CardNotInHand",
    "MustFollowSuit",
    "InvalidDeckSize",
    "EmptyTrick",
    "CardConservationError",
    "MalformedCard",
    "MalformedBid",
    "MalformedCall",
    "InvalidBoardNumber",
    "MalformedSeat",
    "InvalidTrickCount",
    "InconsistentState",
    "error_kind",
    "is_fatal",
]
