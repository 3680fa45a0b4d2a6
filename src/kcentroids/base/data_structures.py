"""
Core data structures for the k-centroids clustering engine.

This module provides the run configuration, the per-iteration state carried
by the convergence controller, and small containers for assignments and
results.
"""

from typing import Optional, Dict, Any, NamedTuple, Union
import math
import torch
from torch import Tensor
from dataclasses import dataclass, replace
from enum import Enum


MAX_RANDOM_SEED = 2 ** 64


class RunPhase(Enum):
    """Phase of the convergence controller."""
    SEEDED = 'seeded'
    ITERATING = 'iterating'
    DONE = 'done'


class StopReason(Enum):
    """Which termination condition ended a run."""
    CONVERGED = 'converged'
    OSCILLATION = 'oscillation'
    MAX_ITERATION = 'max_iteration'
    MIN_DELTA = 'min_delta'

    @property
    def is_converged(self) -> bool:
        """Whether the run stopped at an (approximate) fixed point."""
        return self is not StopReason.MAX_ITERATION


@dataclass(frozen=True)
class ClusteringParameters:
    """Immutable configuration for one run of Lloyd's algorithm.

    Only ``k`` is required. The optional values keep their meaning from the
    estimator keywords:

    - ``max_iteration``: stop after this many iterations. ``None`` or 0
      means unbounded.
    - ``min_delta``: stop once no centroid moved farther than this (true
      Euclidean distance). ``None`` disables the check.
    - ``random_seed``: seed for k-means++. ``None`` draws one seed from the
      operating system at the start of the run.
    """

    k: int
    max_iteration: Optional[int] = None
    min_delta: Optional[Union[int, float]] = None
    random_seed: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.k, bool) or not isinstance(self.k, int):
            raise TypeError(f"k must be int, got {type(self.k)}")
        if self.k <= 0:
            raise ValueError(f"k must be positive, got {self.k}")

        if self.max_iteration is not None:
            if isinstance(self.max_iteration, bool) or not isinstance(self.max_iteration, int):
                raise TypeError(f"max_iteration must be int, got {type(self.max_iteration)}")
            if self.max_iteration < 0:
                raise ValueError(f"max_iteration must be non-negative, got {self.max_iteration}")

        if self.min_delta is not None:
            if isinstance(self.min_delta, bool) or not isinstance(self.min_delta, (int, float)):
                raise TypeError(f"min_delta must be a number, got {type(self.min_delta)}")
            if not math.isfinite(self.min_delta) or self.min_delta < 0:
                raise ValueError(f"min_delta must be finite and non-negative, got {self.min_delta}")

        if self.random_seed is not None:
            if isinstance(self.random_seed, bool) or not isinstance(self.random_seed, int):
                raise TypeError(f"random_seed must be int, got {type(self.random_seed)}")
            if not 0 <= self.random_seed < MAX_RANDOM_SEED:
                raise ValueError(f"random_seed must be in [0, 2**64), got {self.random_seed}")

    @property
    def has_max_iteration(self) -> bool:
        return self.max_iteration is not None and self.max_iteration > 0

    @property
    def has_min_delta(self) -> bool:
        return self.min_delta is not None

    @property
    def has_random_seed(self) -> bool:
        return self.random_seed is not None

    def with_max_iteration(self, max_iteration: int) -> 'ClusteringParameters':
        return replace(self, max_iteration=max_iteration)

    def with_min_delta(self, min_delta: Union[int, float]) -> 'ClusteringParameters':
        return replace(self, min_delta=min_delta)

    def with_random_seed(self, random_seed: int) -> 'ClusteringParameters':
        return replace(self, random_seed=random_seed)


class KMeansResult(NamedTuple):
    """Centroids and labels produced by a run; unpacks as a pair."""
    centroids: Tensor
    labels: Tensor


class AssignmentMatrix:
    """Hard cluster assignments with per-cluster helpers."""

    def __init__(self, assignments: Tensor, n_clusters: int):
        """
        Args:
            assignments: (n,) hard assignments
            n_clusters: Number of clusters K
        """
        self.n_clusters = n_clusters
        self._validate_and_store(assignments)

    def _validate_and_store(self, assignments: Tensor):
        if assignments.dim() != 1:
            raise ValueError(f"Expected 1D assignments, got {assignments.dim()}D")
        if assignments.numel() > 0:
            if assignments.min() < 0 or assignments.max() >= self.n_clusters:
                raise ValueError(f"Assignments must lie in [0, {self.n_clusters})")
        self._labels = assignments.long()

    @property
    def n_points(self) -> int:
        """Number of data points."""
        return self._labels.shape[0]

    @property
    def labels(self) -> Tensor:
        return self._labels

    def get_cluster_mask(self, cluster_idx: int) -> Tensor:
        """Boolean mask of the points assigned to a cluster."""
        return self._labels == cluster_idx

    def get_cluster_indices(self, cluster_idx: int) -> Tensor:
        """Get indices of points assigned to a specific cluster."""
        return torch.where(self._labels == cluster_idx)[0]

    def count_per_cluster(self) -> Tensor:
        """Count points per cluster."""
        return torch.bincount(self._labels, minlength=self.n_clusters)

    def empty_clusters(self) -> Tensor:
        """Indices of clusters without any point."""
        return torch.where(self.count_per_cluster() == 0)[0]


@dataclass
class IterationState:
    """State of the convergence controller after one completed iteration.

    ``centroids`` and ``labels`` are mutually consistent: each centroid is
    the mean of the points carrying its label, except where an empty
    cluster kept its previous centroid. ``previous`` produced ``labels``;
    ``two_ago`` is the set before that (None during the first iteration).
    ``shift`` is the true distance each centroid moved from ``previous``.
    """
    iteration: int
    centroids: Tensor
    labels: Tensor
    previous: Tensor
    two_ago: Optional[Tensor] = None
    shift: Optional[Tensor] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            'iteration': self.iteration,
            'centroids': self.centroids,
            'labels': self.labels,
            'previous': self.previous,
            'two_ago': self.two_ago,
            'shift': self.shift,
        }
