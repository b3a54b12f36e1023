"""
GameState serialization.

Converts a GameState to and from JSON-compatible dicts so the surrounding
service can store it between actions. Cards, calls and contracts are written
in their compact text forms ("AS", "1NT", "X", "4HX").
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable

from .bidding import AuctionEntry, Contract, parse_call, parse_contract
from .config import config_from_dict, config_to_dict
from .deal import Vulnerability
from .deck import Card, parse_card, sort_hand
from .game import GameState, Phase, visible_hands
from .play import Trick
from .scoring import ScoreBreakdown, ScoringResult
from .seats import SEATS, Seat, parse_seat, parse_side

SCHEMA_VERSION = 1


def _cards_to_list(cards: Iterable[Card]) -> list[str]:
    return [str(c) for c in sort_hand(cards)]


def _trick_to_dict(trick: Trick) -> Dict[str, Any]:
    return {
        "plays": [{"seat": seat.name, "card": str(card)} for seat, card in trick.plays],
        "winner": trick.winner.name if trick.winner is not None else None,
    }


def _trick_from_dict(d: Dict[str, Any]) -> Trick:
    plays = tuple((parse_seat(p["seat"]), parse_card(p["card"])) for p in d.get("plays", []))
    winner = d.get("winner")
    return Trick(plays=plays, winner=parse_seat(winner) if winner else None)


def _contract_to_dict(contract: Contract) -> Dict[str, Any]:
    return {
        "contract": f"{contract.level}{contract.strain.letter}{contract.risk_text}",
        "declarer": contract.declarer.name,
    }


def _contract_from_dict(d: Dict[str, Any]) -> Contract:
    return parse_contract(d["contract"], parse_seat(d["declarer"]))


def result_to_dict(result: ScoringResult) -> Dict[str, Any]:
    b = result.breakdown
    return {
        "ns": result.ns,
        "ew": result.ew,
        "breakdown": {
            "trick_score": b.trick_score,
            "overtrick_bonus": b.overtrick_bonus,
            "game_bonus": b.game_bonus,
            "slam_bonus": b.slam_bonus,
            "insult_bonus": b.insult_bonus,
            "penalty": b.penalty,
        },
        "declaring_side": result.declaring_side.value if result.declaring_side else None,
        "tricks_won": result.tricks_won,
        "made": result.made,
        "overtricks": result.overtricks,
        "undertricks": result.undertricks,
        "passed_out": result.passed_out,
        "winning_side": result.winning_side.value if result.winning_side else None,
    }


def result_from_dict(d: Dict[str, Any]) -> ScoringResult:
    side = d.get("declaring_side")
    return ScoringResult(
        ns=int(d["ns"]),
        ew=int(d["ew"]),
        breakdown=ScoreBreakdown(**{k: int(v) for k, v in d.get("breakdown", {}).items()}),
        declaring_side=parse_side(side) if side else None,
        tricks_won=int(d.get("tricks_won", 0)),
        made=bool(d.get("made", False)),
        overtricks=int(d.get("overtricks", 0)),
        undertricks=int(d.get("undertricks", 0)),
        passed_out=bool(d.get("passed_out", False)),
    )


def game_state_to_dict(state: GameState) -> Dict[str, Any]:
    """Serialize a GameState to a JSON-compatible dict."""
    return {
        "schema_version": SCHEMA_VERSION,
        "board_number": state.board_number,
        "dealer": state.dealer.name,
        "vulnerability": {"ns": state.vulnerability.ns, "ew": state.vulnerability.ew},
        "phase": state.phase.value,
        "deck": [str(c) for c in state.deck],
        "hands": {seat.name: _cards_to_list(state.hands[seat]) for seat in SEATS},
        "auction": [{"seat": e.seat.name, "call": str(e.call)} for e in state.auction],
        "contract": _contract_to_dict(state.contract) if state.contract else None,
        "current_trick": _trick_to_dict(state.current_trick),
        "tricks": [_trick_to_dict(t) for t in state.tricks],
        "turn": state.turn.name if state.turn is not None else None,
        "result": result_to_dict(state.result) if state.result else None,
        "config": config_to_dict(state.config),
    }


def game_state_from_dict(d: Dict[str, Any]) -> GameState:
    """
    Deserialize a GameState from a dict produced by game_state_to_dict.
    Raises ValueError for an unsupported schema version.
    """
    version = d.get("schema_version", SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema version: {version}")
    vul = d.get("vulnerability", {})
    turn = d.get("turn")
    return GameState(
        board_number=int(d["board_number"]),
        dealer=parse_seat(d["dealer"]),
        vulnerability=Vulnerability(bool(vul.get("ns", False)), bool(vul.get("ew", False))),
        deck=tuple(parse_card(c) for c in d["deck"]),
        hands={
            parse_seat(name): frozenset(parse_card(c) for c in cards)
            for name, cards in d["hands"].items()
        },
        phase=Phase(d.get("phase", Phase.BIDDING.value)),
        auction=tuple(
            AuctionEntry(parse_seat(e["seat"]), parse_call(e["call"]))
            for e in d.get("auction", [])
        ),
        contract=_contract_from_dict(d["contract"]) if d.get("contract") else None,
        current_trick=_trick_from_dict(d.get("current_trick") or {}),
        tricks=tuple(_trick_from_dict(t) for t in d.get("tricks", [])),
        turn=parse_seat(turn) if turn else None,
        result=result_from_dict(d["result"]) if d.get("result") else None,
        config=config_from_dict(d.get("config", {})),
    )


def game_state_to_json(state: GameState) -> str:
    return json.dumps(game_state_to_dict(state), indent=2)


def game_state_from_json(s: str) -> GameState:
    return game_state_from_dict(json.loads(s))


def state_view(state: GameState, viewer: Seat) -> Dict[str, Any]:
    """
    What one seat is allowed to see, ready to broadcast: the full public
    record, but only the viewer's own hand (and dummy's after the opening
    lead). Other hands are reduced to card counts.
    """
    d = game_state_to_dict(state)
    shown = visible_hands(state, viewer)
    d["hands"] = {seat.name: _cards_to_list(cards) for seat, cards in shown.items()}
    d["hand_sizes"] = {seat.name: len(state.hands[seat]) for seat in SEATS}
    d["viewer"] = viewer.name
    del d["deck"]
    return d


__all__ = [
    "SCHEMA_VERSION",
    "result_to_dict",
    "result_from_dict",
    "game_state_to_dict",
    "game_state_from_dict",
    "game_state_to_json",
    "game_state_from_json",
    "state_view",
]
