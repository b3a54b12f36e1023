"""Tests for engine configuration."""
from pathlib import Path

import pytest

from bridge.config import (
    DEFAULT_CONFIG,
    EngineConfig,
    config_from_dict,
    config_to_dict,
    load_config,
    save_config,
)
from bridge.deal import FOUR_BOARD, SIXTEEN_BOARD


def test_defaults():
    assert DEFAULT_CONFIG.vulnerability_cycle == FOUR_BOARD
    assert DEFAULT_CONFIG.declarer_plays_dummy is True
    assert DEFAULT_CONFIG.hand_sort_suits == "SHDC"


def test_validation():
    with pytest.raises(ValueError):
        EngineConfig(vulnerability_cycle="weekly")
    with pytest.raises(ValueError):
        EngineConfig(hand_sort_suits="SHD")


def test_dict_round_trip_and_missing_keys():
    cfg = EngineConfig(vulnerability_cycle=SIXTEEN_BOARD, declarer_plays_dummy=False, hand_sort_suits="CDHS")
    assert config_from_dict(config_to_dict(cfg)) == cfg
    assert config_from_dict({}) == DEFAULT_CONFIG


def test_save_and_load(tmp_path: Path) -> None:
    cfg = EngineConfig(vulnerability_cycle=SIXTEEN_BOARD)
    path = save_config(cfg, tmp_path / "nested" / "engine.json")
    assert path.exists()
    assert load_config(path) == cfg
