"""
K-means++ seeding.

- centers are rows of the data, distinct when the data rows are distinct
- same seed, same picks
- coincident points get zero weight; all-zero weights fall back to uniform
- greedy variant (n_local_trials) returns data rows too
"""

import pytest
import torch

from kcentroids.initialization import KMeansPlusPlusInit, RandomInit, FromPreviousInit
from kcentroids.base import KMeansResult

import data_gen


def _generator(seed):
    g = torch.Generator()
    g.manual_seed(seed)
    return g


def _row_index(points, row):
    matches = (points == row).all(dim=1).nonzero().flatten().tolist()
    assert matches, f"{row.tolist()} is not a data row"
    return matches


def test_centers_are_distinct_data_rows(scenario_b_points):
    init = KMeansPlusPlusInit()
    centers = init.initialize(scenario_b_points, 3, generator=_generator(7))

    assert centers.shape == (3, 2)
    assert centers.dtype == scenario_b_points.dtype
    assert len(set(init.last_indices_)) == 3
    for idx, row in zip(init.last_indices_, centers):
        assert idx in _row_index(scenario_b_points, row)


def test_all_rows_when_k_equals_n(scenario_b_points):
    init = KMeansPlusPlusInit()
    n = scenario_b_points.shape[0]
    init.initialize(scenario_b_points, n, generator=_generator(3))
    assert sorted(init.last_indices_) == list(range(n))


def test_same_seed_same_picks(scenario_b_points):
    a = KMeansPlusPlusInit()
    b = KMeansPlusPlusInit()
    ca = a.initialize(scenario_b_points, 3, generator=_generator(7))
    cb = b.initialize(scenario_b_points, 3, generator=_generator(7))

    assert a.last_indices_ == b.last_indices_
    assert torch.equal(ca, cb)


def test_duplicates_are_never_picked_twice():
    # Two locations, five copies each: the second center must be the other location
    X = torch.tensor([[0.0, 0.0]] * 5 + [[10.0, 10.0]] * 5)
    for seed in range(20):
        centers = KMeansPlusPlusInit().initialize(X, 2, generator=_generator(seed))
        assert not torch.equal(centers[0], centers[1])


def test_all_identical_points_fall_back_to_uniform():
    X = torch.full((6, 2), 3.0)
    init = KMeansPlusPlusInit()
    centers = init.initialize(X, 3, generator=_generator(0))

    assert centers.shape == (3, 2)
    assert torch.all(centers == 3.0)
    assert all(0 <= i < 6 for i in init.last_indices_)


def test_integer_points():
    X = torch.tensor([[1, 1], [2, 2], [1200, 1200], [2, 2]], dtype=torch.int64)
    centers = KMeansPlusPlusInit().initialize(X, 3, generator=_generator(11))

    assert centers.dtype == torch.int64
    # The three distinct locations are always chosen
    assert sorted(tuple(r) for r in centers.tolist()) == [(1, 1), (2, 2), (1200, 1200)]


def test_greedy_variant_returns_rows(scenario_b_points):
    init = KMeansPlusPlusInit(n_local_trials=4)
    centers = init.initialize(scenario_b_points, 3, generator=_generator(5))
    assert len(set(init.last_indices_)) == 3
    for row in centers:
        _row_index(scenario_b_points, row)


def test_invalid_arguments():
    with pytest.raises(ValueError):
        KMeansPlusPlusInit(n_local_trials=0)
    with pytest.raises(ValueError):
        KMeansPlusPlusInit().initialize(torch.zeros(2, 2), 3)


def test_random_init_distinct_rows():
    X = torch.tensor(data_gen.make_line_1d(10))
    centers = RandomInit().initialize(X, 4, generator=_generator(1))
    assert centers.shape == (4, 2)
    assert len({tuple(r) for r in centers.tolist()}) == 4


def test_from_previous_init_casts_and_checks_shape():
    X = torch.zeros(5, 2, dtype=torch.float64)
    init = FromPreviousInit([[0, 0], [1, 1]])
    centers = init.initialize(X, 2)
    assert centers.dtype == torch.float64
    assert centers.tolist() == [[0.0, 0.0], [1.0, 1.0]]

    previous = KMeansResult(torch.ones(2, 2), torch.zeros(5, dtype=torch.long))
    assert torch.equal(FromPreviousInit(previous).initialize(X, 2), torch.ones(2, 2, dtype=torch.float64))

    with pytest.raises(ValueError):
        init.initialize(X, 3)
    with pytest.raises(ValueError):
        init.initialize(torch.zeros(5, 3), 2)
