"""
Move history: the ordered list of calls and plays that produced a board,
in text form, and replay of such a list through the validated entry points.
"""
from __future__ import annotations

from typing import Iterable, NamedTuple, Sequence

from .bidding import parse_call
from .config import EngineConfig
from .deck import Card, parse_card
from .game import GameState, Phase, apply_call, apply_play, complete_board, deal_board
from .seats import Seat, parse_seat

CALL = "CALL"
PLAY = "PLAY"


class MoveRecord(NamedTuple):
    sequence: int  # 1-based
    seat: Seat  # seat whose call or card it is
    move_type: str  # "CALL" | "PLAY"
    text: str  # "1NT", "X", "AS", ...

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "seat": self.seat.name,
            "type": self.move_type,
            "move": self.text,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "MoveRecord":
        move_type = str(d["type"]).upper()
        if move_type not in (CALL, PLAY):
            raise ValueError(f"Unknown move type: {d['type']!r}")
        return cls(int(d["sequence"]), parse_seat(d["seat"]), move_type, str(d["move"]))


def move_log(state: GameState) -> list[MoveRecord]:
    """Every call, then every card, in the order they were made."""
    records: list[MoveRecord] = []
    for entry in state.auction:
        records.append(MoveRecord(len(records) + 1, entry.seat, CALL, str(entry.call)))
    plays = [p for t in state.tricks for p in t.plays]
    plays.extend(state.current_trick.plays)
    for seat, card in plays:
        records.append(MoveRecord(len(records) + 1, seat, PLAY, str(card)))
    return records


def replay(
    board_number: int,
    deck: Sequence[Card] | Iterable[str],
    moves: Iterable[MoveRecord],
    config: EngineConfig | None = None,
    *,
    complete: bool = True,
) -> GameState:
    """
    Rebuild a board from its dealt deck and move log. Each move goes through
    apply_call / apply_play, so an illegal log raises the same errors a live
    player would get. With ``complete`` a fully played board is scored.
    """
    cards = [c if isinstance(c, Card) else parse_card(c) for c in deck]
    state = deal_board(board_number, deck=cards, config=config)
    for record in sorted(moves, key=lambda r: r.sequence):
        if record.move_type == CALL:
            state = apply_call(state, record.seat, parse_call(record.text))
        else:
            state = apply_play(state, record.seat, parse_card(record.text))
    if complete and state.phase is Phase.SCORING:
        state = complete_board(state)
    return state


__all__ = ["CALL", "PLAY", "MoveRecord", "move_log", "replay"]
