"""Tests for weighted outcome selection."""
from collections import Counter

import numpy as np
import pytest

from spinwheel.core.errors import ValidationError
from spinwheel.prizes.models import OutcomeTable
from spinwheel.prizes.rng import UINT32_MASK, Mulberry32
from spinwheel.prizes.selector import cumulative_weights, select_outcome


def test_same_seed_same_selection(three_prizes):
    """Verify selection is reproducible for a given seed."""
    first = select_outcome(three_prizes, seed=2024)
    second = select_outcome(three_prizes, seed=2024)

    assert first.index == second.index
    assert first.roll == second.roll
    np.testing.assert_array_equal(first.cumulative, second.cumulative)


def test_seed_used_replays_unseeded_selection(three_prizes):
    """Verify an OS-seeded selection can be replayed from seed_used."""
    selection = select_outcome(three_prizes)
    replay = select_outcome(three_prizes, seed=selection.seed_used)
    assert replay.index == selection.index
    assert 0 <= selection.seed_used <= UINT32_MASK


def test_explicit_seed_reported_verbatim(three_prizes):
    assert select_outcome(three_prizes, seed=17).seed_used == 17


def test_probabilities_summing_to_point_nine_rejected(make_prizes):
    with pytest.raises(ValidationError):
        select_outcome(make_prizes(0.5, 0.3, 0.1), seed=1)


def test_probabilities_summing_to_one_accepted(make_prizes):
    selection = select_outcome(make_prizes(0.5, 0.3, 0.2), seed=1)
    assert selection.index in (0, 1, 2)


@pytest.mark.parametrize("probabilities", [
    (0.5, 0.5),
    (0.1,) * 10,
])
def test_table_length_bounds(make_prizes, probabilities):
    with pytest.raises(ValidationError):
        select_outcome(make_prizes(*probabilities), seed=1)


def test_eight_entries_accepted(make_prizes):
    select_outcome(make_prizes(*(0.125,) * 8), seed=3)


@pytest.mark.parametrize("seed", [-1, UINT32_MASK + 1])
def test_seed_out_of_range_rejected(three_prizes, seed):
    with pytest.raises(ValidationError):
        select_outcome(three_prizes, seed=seed)


def test_cumulative_weights_are_float32_prefix_sums(three_prizes):
    cumulative = cumulative_weights(OutcomeTable.of(three_prizes))
    assert cumulative.dtype == np.float32
    np.testing.assert_allclose(cumulative, [0.5, 0.8, 1.0], rtol=1e-6)


def test_index_is_first_bound_covering_roll(three_prizes):
    """Verify the chosen index is the first cumulative bound >= roll."""
    for seed in range(200):
        selection = select_outcome(three_prizes, seed=seed)
        cumulative = selection.cumulative
        assert selection.roll <= float(cumulative[selection.index]) or selection.index == 2
        if selection.index > 0:
            assert selection.roll > float(cumulative[selection.index - 1])


def test_roll_above_last_bound_picks_last_index(make_prizes, monkeypatch):
    """Verify a roll past a short final prefix sum falls back to the last index."""
    table = OutcomeTable.of(make_prizes(0.5, 0.3, 0.2 - 5e-7))
    assert float(cumulative_weights(table)[-1]) < 0.9999999

    monkeypatch.setattr(Mulberry32, "next_float", lambda self: 0.9999999)
    selection = select_outcome(table, seed=1)

    assert selection.roll == 0.9999999
    assert selection.index == len(table) - 1


def test_distribution_follows_weights(three_prizes):
    """Verify frequencies over many seeds track the probabilities."""
    trials = 10000
    counts = Counter(select_outcome(three_prizes, seed=seed).index for seed in range(trials))
    for index, expected in enumerate((0.5, 0.3, 0.2)):
        assert abs(counts[index] / trials - expected) < 0.03
