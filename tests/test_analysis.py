"""Tests for the shuffle audit."""
import random

import numpy as np
import pytest

from bridge.analysis import ShuffleAudit, audit_shuffle, chi_square_statistic, position_counts


def test_position_counts_margins():
    counts = position_counts(200, random.Random(3))
    assert counts.shape == (52, 52)
    assert np.all(counts.sum(axis=0) == 200)
    assert np.all(counts.sum(axis=1) == 200)


def test_shuffle_passes_uniformity_audit():
    audit = audit_shuffle(trials=5200, seed=2024)
    assert audit.trials == 5200
    assert audit.dof == 52 * 51
    assert audit.is_uniform()


def test_biased_counts_fail_audit():
    # An identity "shuffle": every card always lands in its own position.
    counts = np.eye(52, dtype=np.int64) * 1000
    statistic = chi_square_statistic(counts)
    assert not ShuffleAudit(trials=1000, statistic=statistic, dof=52 * 51).is_uniform()


def test_bad_inputs():
    with pytest.raises(ValueError):
        position_counts(0)
    with pytest.raises(ValueError):
        chi_square_statistic(np.zeros((52, 52)))
