"""
Core interfaces for the k-centroids clustering engine.

This module defines the abstract base classes that every pluggable step of
Lloyd's algorithm implements. All of them work on whole tensors: a centroid
set is a (k, d) tensor and a label vector is an (n,) int64 tensor, and each
step returns a new tensor rather than mutating its inputs.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
import torch
from torch import Tensor


class DistanceMetric(ABC):
    """Abstract base class for point-to-centroid distance computations."""

    @abstractmethod
    def compute(self, points: Tensor, centroids: Tensor, **kwargs) -> Tensor:
        """Compute distances from every point to every centroid.

        Args:
            points: (n, d) tensor of points
            centroids: (k, d) tensor of centroids
            **kwargs: Metric-specific parameters

        Returns:
            (n, k) tensor of distances
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for centroid seeding strategies."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Produce the initial centroid set.

        Args:
            points: (n, d) tensor of data points
            n_clusters: Number of centroids to produce
            generator: CPU generator driving every random draw
            **kwargs: Strategy-specific parameters

        Returns:
            (n_clusters, d) tensor of initial centroids, same dtype as points
        """
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-centroid assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Tensor, centroids: Tensor,
                            **kwargs) -> Tensor:
        """Compute the label of every point.

        Args:
            points: (n, d) tensor of data points
            centroids: (k, d) tensor of current centroids
            **kwargs: Strategy-specific parameters

        Returns:
            (n,) int64 tensor of cluster indices in [0, k)
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for centroid recomputation strategies."""

    @abstractmethod
    def update(self, points: Tensor, labels: Tensor,
               previous_centroids: Tensor, **kwargs) -> Tensor:
        """Recompute centroids from the current assignment.

        Args:
            points: (n, d) tensor of all data points
            labels: (n,) tensor of cluster indices
            previous_centroids: (k, d) centroids that produced ``labels``;
                used for clusters that received no points
            **kwargs: Update-specific parameters

        Returns:
            New (k, d) tensor of centroids
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for termination checks."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check whether the run should stop.

        Args:
            current_state: Dictionary describing the iteration just
                completed (see ``IterationState.as_dict``)

        Returns:
            True if the run should stop, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""

    @abstractmethod
    def compute(self, points: Tensor, centroids: Tensor,
                labels: Tensor) -> Tensor:
        """Compute objective function value.

        Args:
            points: (n, d) tensor of data points
            centroids: (k, d) tensor of centroids
            labels: (n,) cluster assignments

        Returns:
            Scalar objective value
        """
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass
