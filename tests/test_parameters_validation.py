"""
Run configuration and input validation.

- ClusteringParameters is immutable; with_* returns modified copies
- invalid values are rejected with TypeError / ValueError
- validate_data keeps the element type and rejects unsigned types
- check_random_state records the seed a run starts from
- AssignmentMatrix helpers
"""

import dataclasses

import numpy as np
import pytest
import torch

from kcentroids.base import AssignmentMatrix, ClusteringParameters
from kcentroids.utils import (
    check_n_clusters,
    check_random_state,
    validate_data,
)


# ---------------------------------------------------------------------------
# ClusteringParameters
# ---------------------------------------------------------------------------

def test_defaults_and_flags():
    p = ClusteringParameters(k=3)
    assert (p.k, p.max_iteration, p.min_delta, p.random_seed) == (3, None, None, None)
    assert not p.has_max_iteration
    assert not p.has_min_delta
    assert not p.has_random_seed

    assert not ClusteringParameters(k=3, max_iteration=0).has_max_iteration
    assert ClusteringParameters(k=3, min_delta=0).has_min_delta


def test_parameters_are_immutable():
    p = ClusteringParameters(k=3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.k = 4


def test_with_methods_return_copies():
    p = ClusteringParameters(k=3)
    q = p.with_max_iteration(10).with_min_delta(0.5).with_random_seed(7)

    assert (q.k, q.max_iteration, q.min_delta, q.random_seed) == (3, 10, 0.5, 7)
    assert p == ClusteringParameters(k=3)
    assert q.has_max_iteration and q.has_min_delta and q.has_random_seed


@pytest.mark.parametrize("kwargs, exc", [
    ({"k": 0}, ValueError),
    ({"k": -1}, ValueError),
    ({"k": 2.0}, TypeError),
    ({"k": True}, TypeError),
    ({"k": 2, "max_iteration": -1}, ValueError),
    ({"k": 2, "max_iteration": 1.5}, TypeError),
    ({"k": 2, "min_delta": -0.1}, ValueError),
    ({"k": 2, "min_delta": float("nan")}, ValueError),
    ({"k": 2, "min_delta": "0.1"}, TypeError),
    ({"k": 2, "random_seed": -1}, ValueError),
    ({"k": 2, "random_seed": 2 ** 64}, ValueError),
    ({"k": 2, "random_seed": 1.0}, TypeError),
])
def test_invalid_parameters(kwargs, exc):
    with pytest.raises(exc):
        ClusteringParameters(**kwargs)


def test_largest_seed_accepted():
    assert ClusteringParameters(k=1, random_seed=2 ** 64 - 1).random_seed == 2 ** 64 - 1


# ---------------------------------------------------------------------------
# Data validation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("dtype", [torch.float32, torch.float64, torch.int16, torch.int64])
def test_validate_data_keeps_dtype(dtype):
    X = torch.zeros(4, 2, dtype=dtype)
    assert validate_data(X).dtype == dtype


def test_validate_data_from_numpy_and_lists():
    assert validate_data(np.zeros((3, 2))).dtype == torch.float64
    assert validate_data([[1, 2], [3, 4]]).dtype == torch.int64


@pytest.mark.parametrize("dtype", [torch.uint8, torch.bool])
def test_unsigned_dtypes_rejected(dtype):
    with pytest.raises(TypeError):
        validate_data(torch.zeros(3, 2, dtype=dtype))


def test_validate_data_shape_and_values():
    with pytest.raises(ValueError):
        validate_data(torch.zeros(5))
    with pytest.raises(ValueError):
        validate_data(torch.zeros(0, 2))
    with pytest.raises(ValueError):
        validate_data(torch.tensor([[1.0, float("nan")]]))
    with pytest.raises(ValueError):
        validate_data(torch.tensor([[1.0, float("inf")]]))
    with pytest.raises(TypeError):
        validate_data("not points")


def test_check_n_clusters():
    check_n_clusters(3, 3)
    with pytest.raises(ValueError):
        check_n_clusters(4, 3)
    with pytest.raises(ValueError):
        check_n_clusters(0, 3)
    with pytest.raises(TypeError):
        check_n_clusters(2.0, 3)


# ---------------------------------------------------------------------------
# Random state
# ---------------------------------------------------------------------------

def test_random_state_from_int_is_reproducible():
    g1, s1 = check_random_state(7)
    g2, s2 = check_random_state(7)
    assert s1 == s2 == 7
    assert torch.equal(torch.rand(5, generator=g1), torch.rand(5, generator=g2))


def test_random_state_none_records_entropy_seed():
    g, seed = check_random_state(None)
    assert isinstance(seed, int)
    assert g.initial_seed() == seed

    replay, _ = check_random_state(seed)
    assert torch.equal(torch.rand(5, generator=g), torch.rand(5, generator=replay))


def test_random_state_from_advanced_generator_records_replayable_seed():
    source = torch.Generator()
    source.manual_seed(77)
    torch.rand(10, generator=source)

    g, seed = check_random_state(source)
    assert g is not source
    assert g.initial_seed() == seed

    replay, _ = check_random_state(seed)
    assert torch.equal(torch.rand(5, generator=g), torch.rand(5, generator=replay))


def test_random_state_rejects_other_types():
    with pytest.raises(TypeError):
        check_random_state("7")
    with pytest.raises(ValueError):
        check_random_state(-3)


# ---------------------------------------------------------------------------
# AssignmentMatrix
# ---------------------------------------------------------------------------

def test_assignment_matrix_helpers():
    am = AssignmentMatrix(torch.tensor([0, 2, 2, 0, 2]), 4)
    assert am.n_points == 5
    assert am.count_per_cluster().tolist() == [2, 0, 3, 0]
    assert am.get_cluster_indices(2).tolist() == [1, 2, 4]
    assert am.get_cluster_mask(0).tolist() == [True, False, False, True, False]
    assert am.empty_clusters().tolist() == [1, 3]


def test_assignment_matrix_rejects_out_of_range():
    with pytest.raises(ValueError):
        AssignmentMatrix(torch.tensor([0, 3]), 3)
    with pytest.raises(ValueError):
        AssignmentMatrix(torch.zeros(2, 2, dtype=torch.long), 3)
