"""
Shuffle audit: checks that the dealing shuffle is unbiased.

Shuffles a fresh deck many times and counts where each card lands. For an
unbiased shuffle every (card, position) cell is hit trials / 52 times on
average, and the Pearson statistic over all cells has mean 52 × 51.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass

import numpy as np

from .deck import card_index, make_deck_52, shuffle_deck

NUM_CARDS: int = 52


@dataclass(frozen=True)
class ShuffleAudit:
    trials: int
    statistic: float
    dof: int

    @property
    def z_score(self) -> float:
        """Distance of the statistic from its mean, in standard deviations."""
        return (self.statistic - self.dof) / math.sqrt(2 * self.dof)

    def is_uniform(self, max_z: float = 6.0) -> bool:
        return abs(self.z_score) <= max_z


def position_counts(trials: int, rng: random.Random | None = None) -> np.ndarray:
    """(52, 52) matrix: counts[card_index, position]."""
    if trials <= 0:
        raise ValueError("trials must be positive")
    if rng is None:
        rng = random.Random()
    counts = np.zeros((NUM_CARDS, NUM_CARDS), dtype=np.int64)
    deck = make_deck_52()
    positions = np.arange(NUM_CARDS)
    for _ in range(trials):
        shuffled = shuffle_deck(deck, rng)
        idx = np.fromiter((card_index(c) for c in shuffled), dtype=np.int64, count=NUM_CARDS)
        counts[idx, positions] += 1
    return counts


def chi_square_statistic(counts: np.ndarray) -> float:
    """Pearson statistic against a uniform expectation in every cell."""
    counts = np.asarray(counts, dtype=np.float64)
    expected = counts.sum() / counts.size
    if expected <= 0:
        raise ValueError("counts are empty")
    return float(((counts - expected) ** 2 / expected).sum())


def audit_shuffle(trials: int = 10_000, seed: int | None = None) -> ShuffleAudit:
    counts = position_counts(trials, random.Random(seed))
    return ShuffleAudit(
        trials=trials,
        statistic=chi_square_statistic(counts),
        dof=NUM_CARDS * (NUM_CARDS - 1),
    )


__all__ = [
    "ShuffleAudit",
    "position_counts",
    "chi_square_statistic",
    "audit_shuffle",
]
