"""
Euclidean distance metric for clustering.

The squared form is used wherever only the ordering of distances matters
(assignment, k-means++ sampling); the true distance is used where a
magnitude is compared against a threshold (centroid movement, inertia).
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


def _as_float(x: Tensor) -> Tensor:
    """Promote integer tensors to the default float dtype."""
    if x.is_floating_point():
        return x
    return x.to(torch.get_default_dtype())


def _widen(x: Tensor) -> Tensor:
    """Promote integer tensors to int64 so squares of differences do not wrap."""
    if x.is_floating_point() or x.dtype == torch.int64:
        return x
    return x.to(torch.int64)


def distance_squared(a: Tensor, b: Tensor) -> Tensor:
    """Sum over the last dimension of (a - b)^2.

    Broadcasts, so ``distance_squared(points, center)`` returns one value
    per row. Floating inputs keep their dtype, integer inputs give int64.
    """
    diff = _widen(a) - _widen(b)
    return torch.sum(diff * diff, dim=-1)


def distance(a: Tensor, b: Tensor) -> Tensor:
    """True Euclidean distance, always floating point."""
    return torch.sqrt(_as_float(distance_squared(a, b)))


def squared_distance_matrix(points: Tensor, centroids: Tensor) -> Tensor:
    """(n, k) squared distances from every point to every centroid.

    Computed from explicit differences rather than the
    ||x||^2 + ||c||^2 - 2 x.c expansion so equal distances compare equal.
    """
    diff = _widen(points).unsqueeze(1) - _widen(centroids).unsqueeze(0)
    return torch.sum(diff * diff, dim=2)


class EuclideanDistance(DistanceMetric):
    """Squared Euclidean distance metric.

    Computes ||x - c||^2 for every point x and centroid c.
    """

    def __init__(self, squared: bool = True):
        """
        Args:
            squared: If True, return squared distances (default).
                    If False, return actual Euclidean distances.
        """
        self.squared = squared

    def compute(self, points: Tensor, centroids: Tensor, **kwargs) -> Tensor:
        """Compute Euclidean distances from points to centroids.

        Args:
            points: (n, d) tensor of points
            centroids: (k, d) tensor of centroids, or a single (d,) center

        Returns:
            (n, k) tensor of distances, or (n,) for a single center
        """
        if centroids.dim() == 1:
            squared_distances = distance_squared(points, centroids.unsqueeze(0))
        else:
            if centroids.shape[-1] != points.shape[-1]:
                raise ValueError(f"Centroids have dimension {centroids.shape[-1]}, "
                                 f"points have dimension {points.shape[-1]}")
            squared_distances = squared_distance_matrix(points, centroids)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(_as_float(squared_distances))
