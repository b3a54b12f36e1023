"""
Command-line interface for the bridge engine.

Usage examples (after ``pip install -e .``):

    bridge deal --board 3 --seed 7
    bridge score 4H --declarer S --tricks 10 --vul ns
    bridge replay board.json --output final_state.json
    bridge audit-shuffle --trials 20000 --seed 1
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .analysis import audit_shuffle
from .bidding import parse_contract
from .config import DEFAULT_CONFIG, EngineConfig, load_config
from .deal import Vulnerability
from .deck import format_hand
from .errors import BridgeError
from .game import GameState, deal_board
from .history import MoveRecord, replay
from .persistence import game_state_to_json
from .scoring import ScoringResult, score_contract
from .seats import SEATS, Side, parse_seat

logger = logging.getLogger(__name__)


def _load_cfg(path: Optional[str]) -> EngineConfig:
    return load_config(path) if path else DEFAULT_CONFIG


def _print_board(state: GameState) -> None:
    print(
        f"Board {state.board_number}  Dealer {state.dealer.name}  "
        f"Vul {state.vulnerability.label}"
    )
    for seat in SEATS:
        print(f"  {seat.name:<5}  {format_hand(state.hands[seat], state.config.hand_sort_suits)}")


def _print_result(result: ScoringResult) -> None:
    if result.passed_out:
        print("Passed out: NS 0, EW 0")
        return
    b = result.breakdown
    outcome = (
        f"made with {result.overtricks} overtrick(s)" if result.made
        else f"down {result.undertricks}"
    )
    print(f"Declaring side {result.declaring_side.value}: {result.tricks_won} tricks, {outcome}")
    print(
        f"  trick score {b.trick_score}, overtricks {b.overtrick_bonus}, "
        f"game/partscore {b.game_bonus}, slam {b.slam_bonus}, "
        f"doubled bonus {b.insult_bonus}, penalty {b.penalty}"
    )
    print(f"  NS {result.ns}, EW {result.ew}")


# ---- deal ----

def _add_deal_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("deal", help="Deal one board and print the hands.")
    parser.add_argument("--board", type=int, default=1, help="1-based board number.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the shuffle.")
    parser.add_argument("--config", type=str, default=None, help="Path to an engine config JSON file.")
    parser.set_defaults(func=_cmd_deal)


def _cmd_deal(args: argparse.Namespace) -> int:
    state = deal_board(args.board, args.seed, config=_load_cfg(args.config))
    _print_board(state)
    return 0


# ---- score ----

def _add_score_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("score", help="Score a contract result.")
    parser.add_argument("contract", type=str, help='Contract, e.g. "4H", "3NTX", "6SXX".')
    parser.add_argument("--declarer", type=str, required=True, help="Declarer seat: N, E, S or W.")
    parser.add_argument("--tricks", type=int, required=True, help="Tricks taken by declarer's side.")
    parser.add_argument(
        "--vul",
        type=str,
        default="none",
        choices=["none", "ns", "ew", "both"],
        help="Vulnerability.",
    )
    parser.set_defaults(func=_cmd_score)


def _cmd_score(args: argparse.Namespace) -> int:
    try:
        contract = parse_contract(args.contract, parse_seat(args.declarer))
        result = score_contract(contract, args.tricks, Vulnerability.from_label(args.vul))
    except BridgeError as exc:
        logger.error("Cannot score %r: %s: %s", args.contract, exc.code, exc.message)
        return 1
    except ValueError as exc:
        logger.error("Cannot score %r: %s", args.contract, exc)
        return 1
    print(f"Contract {contract}")
    _print_result(result)
    return 0


# ---- replay ----

def _add_replay_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "replay",
        help="Replay a board from a JSON move log and print the result.",
    )
    parser.add_argument(
        "path",
        type=str,
        help='JSON file: {"board": N, "seed": S or "deck": [...], "moves": [...]}.',
    )
    parser.add_argument("--output", type=str, default=None, help="Write the final GameState JSON here.")
    parser.add_argument("--config", type=str, default=None, help="Path to an engine config JSON file.")
    parser.set_defaults(func=_cmd_replay)


def _deck_for(data: Dict[str, Any], cfg: EngineConfig) -> list:
    if "deck" in data:
        return list(data["deck"])
    if "seed" in data:
        return list(deal_board(int(data["board"]), int(data["seed"]), config=cfg).deck)
    raise ValueError('Replay file needs either "deck" or "seed"')


def _cmd_replay(args: argparse.Namespace) -> int:
    cfg = _load_cfg(args.config)
    with Path(args.path).open("r", encoding="utf-8") as f:
        data = json.load(f)
    board = int(data["board"])
    moves = [MoveRecord.from_dict(m) for m in data.get("moves", [])]
    try:
        state = replay(board, _deck_for(data, cfg), moves, cfg)
    except BridgeError as exc:
        logger.error("Replay of board %d failed: %s: %s", board, exc.code, exc.message)
        return 1

    print(f"Board {board}: {len(moves)} moves, phase {state.phase.value}")
    if state.contract is not None:
        print(f"Contract {state.contract}")
        print(f"Tricks NS {state.tricks_won(Side.NS)}, EW {state.tricks_won(Side.EW)}")
    if state.result is not None:
        _print_result(state.result)

    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(game_state_to_json(state), encoding="utf-8")
        logger.info("Wrote final state to %s", out)
    return 0


# ---- audit-shuffle ----

def _add_audit_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "audit-shuffle",
        help="Check the shuffle for positional bias (chi-square).",
    )
    parser.add_argument("--trials", type=int, default=10_000, help="Number of shuffles.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument("--max-z", type=float, default=6.0, help="Largest acceptable z-score.")
    parser.set_defaults(func=_cmd_audit)


def _cmd_audit(args: argparse.Namespace) -> int:
    audit = audit_shuffle(args.trials, args.seed)
    ok = audit.is_uniform(args.max_z)
    print(
        f"trials={audit.trials} chi2={audit.statistic:.1f} "
        f"expected={audit.dof} z={audit.z_score:.2f} "
        f"{'OK' if ok else 'BIASED'}"
    )
    return 0 if ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bridge", description="Contract bridge engine CLI.")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_deal_parser(subparsers)
    _add_score_parser(subparsers)
    _add_replay_parser(subparsers)
    _add_audit_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    if hasattr(args, "func"):
        return args.func(args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
