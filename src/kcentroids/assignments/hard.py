"""
Hard assignment strategy for clustering algorithms.

Assigns each point to its nearest centroid based on squared Euclidean
distance.
"""

import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy
from ..distances.euclidean import EuclideanDistance


def nearest_centroid(points: Tensor, centroids: Tensor) -> Tensor:
    """Index of the nearest centroid for every point.

    ``torch.argmin`` returns the first minimal index, so ties go to the
    lowest centroid index.
    """
    distances = EuclideanDistance(squared=True).compute(points, centroids)
    return torch.argmin(distances, dim=1)


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest centroid.

    Each point is assigned to exactly one cluster based on minimum distance.
    Points are independent of each other, so the work can be split freely
    (see ``kcentroids.parallel.ParallelHardAssignment``).
    """

    def compute_assignments(self, points: Tensor, centroids: Tensor,
                            **kwargs) -> Tensor:
        """Assign each point to nearest centroid.

        Args:
            points: (n, d) data points
            centroids: (k, d) current centroids
            **kwargs: Ignored for basic hard assignment

        Returns:
            (n,) tensor of cluster indices
        """
        return nearest_centroid(points, centroids)
