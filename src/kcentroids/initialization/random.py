"""
Random initialization strategy for clustering algorithms.

Selects random points from the dataset as initial cluster centers.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy


class RandomInit(InitializationStrategy):
    """Random initialization by selecting points from the dataset.

    Selects n_clusters distinct rows (without replacement) as initial centers.
    """

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Initialize clusters with random points.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            generator: CPU generator for the permutation

        Returns:
            (n_clusters, d) tensor of centers
        """
        n_points = points.shape[0]

        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

        indices = torch.randperm(n_points, generator=generator)[:n_clusters]
        return points.index_select(0, indices.to(points.device)).clone()
