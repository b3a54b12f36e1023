"""
Engine configuration.

Saved as a small JSON file; missing keys fall back to the defaults below.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict

from .deal import FOUR_BOARD, VULNERABILITY_CYCLES
from .deck import SUIT_CHARS


@dataclass(frozen=True)
class EngineConfig:
    """Rules variations the engine supports."""

    # "four_board" (board 1 none, 2 NS, 3 EW, 4 both) or "sixteen_board" (ACBL)
    vulnerability_cycle: str = FOUR_BOARD
    # When dummy is on turn, accept the play from declarer's seat.
    declarer_plays_dummy: bool = True
    # Suit-group order used to sort hands for display.
    hand_sort_suits: str = "SHDC"

    def __post_init__(self) -> None:
        if self.vulnerability_cycle not in VULNERABILITY_CYCLES:
            raise ValueError(
                f"vulnerability_cycle must be one of {VULNERABILITY_CYCLES}, "
                f"got {self.vulnerability_cycle!r}"
            )
        if sorted(self.hand_sort_suits.upper()) != sorted(SUIT_CHARS):
            raise ValueError(f"hand_sort_suits must order C, D, H and S once each: {self.hand_sort_suits!r}")


DEFAULT_CONFIG = EngineConfig()


def config_to_dict(cfg: EngineConfig) -> Dict[str, Any]:
    return asdict(cfg)


def config_from_dict(d: Dict[str, Any]) -> EngineConfig:
    return EngineConfig(
        vulnerability_cycle=str(d.get("vulnerability_cycle", FOUR_BOARD)),
        declarer_plays_dummy=bool(d.get("declarer_plays_dummy", True)),
        hand_sort_suits=str(d.get("hand_sort_suits", "SHDC")),
    )


def load_config(path: str | Path) -> EngineConfig:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return config_from_dict(json.load(f))


def save_config(cfg: EngineConfig, path: str | Path) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(config_to_dict(cfg), f, indent=2)
    return p


__all__ = [
    "EngineConfig",
    "DEFAULT_CONFIG",
    "config_to_dict",
    "config_from_dict",
    "load_config",
    "save_config",
]
