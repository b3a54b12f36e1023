"""
In-memory holder for one board, for use by a service layer.

The engine functions are pure; something still has to make sure only one
action at a time is applied to a board and that every participant hears
about it. BoardTable does that with a lock, a version counter for
compare-and-swap style writers, and explicit event sinks.
"""
from __future__ import annotations

import logging
import threading
from typing import Iterable, Protocol, runtime_checkable

from .errors import BridgeError, StaleState, error_kind
from .game import Action, Event, GameState, Phase, default_action, score_board, submit
from .seats import Seat, check_seat

logger = logging.getLogger(__name__)


@runtime_checkable
class EventSink(Protocol):
    """Anything that wants to hear about board changes (a socket room, a log, a test)."""

    def publish(self, board_number: int, version: int, events: tuple[Event, ...]) -> None:
        ...


class BoardTable:
    """
    Owns the current GameState of one board.

    ``submit`` applies one action under the lock. Pass ``expected_version``
    (the version the client last saw) to reject writers that acted on a stale
    read. When the last card is played the board is scored straight away.
    A sink that raises is logged and skipped; the action still stands.
    """

    def __init__(self, state: GameState, sinks: Iterable[EventSink] = ()) -> None:
        self._state = state
        self._version = 0
        self._lock = threading.Lock()
        self._sinks: list[EventSink] = list(sinks)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def version(self) -> int:
        return self._version

    def subscribe(self, sink: EventSink) -> None:
        with self._lock:
            self._sinks.append(sink)

    def snapshot(self) -> tuple[GameState, int]:
        with self._lock:
            return self._state, self._version

    def submit(
        self,
        seat: Seat,
        action: Action,
        expected_version: int | None = None,
    ) -> GameState:
        seat = check_seat(seat)
        with self._lock:
            if expected_version is not None and expected_version != self._version:
                raise StaleState(
                    f"Board {self._state.board_number} is at version {self._version}, "
                    f"not {expected_version}"
                )
            try:
                new, events = submit(self._state, seat, action)
            except BridgeError as exc:
                logger.info(
                    "Board %d: rejected %s from %s (%s %s: %s)",
                    self._state.board_number,
                    action,
                    seat.name,
                    error_kind(exc),
                    exc.code,
                    exc.message,
                )
                raise
            if new.phase is Phase.SCORING:
                new, scored = score_board(new)
                events = events + scored
            self._state = new
            self._version += 1
            version = self._version
            sinks = list(self._sinks)

        for sink in sinks:
            try:
                sink.publish(new.board_number, version, events)
            except Exception:
                # Already committed: report the sink and carry on.
                logger.exception(
                    "Board %d: event sink %r failed at version %d",
                    new.board_number,
                    sink,
                    version,
                )
        return new

    def submit_default(self, seat: Seat) -> GameState:
        """Apply the synthetic action for a seat whose turn timed out."""
        seat = check_seat(seat)
        action = default_action(self._state)
        logger.info(
            "Board %d: %s timed out, submitting %s",
            self._state.board_number,
            seat.name,
            action,
        )
        return self.submit(seat, action)


__all__ = ["EventSink", "BoardTable"]
