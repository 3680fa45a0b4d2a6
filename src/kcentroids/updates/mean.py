"""
Mean update strategy for centroid-based clustering.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import ParameterUpdater


def accumulator_dtype(dtype: torch.dtype) -> torch.dtype:
    """Element type used to sum points: int64 for integers, else ``dtype``."""
    if dtype.is_floating_point:
        return dtype
    return torch.int64


def divide_mean(sums: Tensor, counts: Tensor, dtype: Optional[torch.dtype] = None) -> Tensor:
    """Divide per-cluster sums by counts.

    Integer sums use truncating division, floating sums true division.
    ``counts`` must be broadcastable against ``sums`` and non-zero. The
    result is cast to ``dtype`` when given.
    """
    counts = counts.to(sums.dtype)
    if sums.is_floating_point():
        means = sums / counts
    else:
        means = torch.div(sums, counts, rounding_mode='trunc')
    if dtype is not None:
        means = means.to(dtype)
    return means


class MeanUpdater(ParameterUpdater):
    """Recomputes every centroid as the mean of its assigned points.

    Accumulates sums and counts for all clusters in one pass over the data.
    A cluster that received no points keeps its previous centroid.
    """

    def update(self, points: Tensor, labels: Tensor,
               previous_centroids: Tensor, **kwargs) -> Tensor:
        """Compute new centroids.

        Args:
            points: (n, d) data points
            labels: (n,) cluster index of every point
            previous_centroids: (k, d) centroids that produced ``labels``
            **kwargs: Ignored

        Returns:
            (k, d) new centroids
        """
        n_clusters, dimension = previous_centroids.shape
        labels = labels.long()

        acc_dtype = accumulator_dtype(points.dtype)
        sums = torch.zeros(n_clusters, dimension, dtype=acc_dtype, device=points.device)
        sums.index_add_(0, labels, points.to(acc_dtype))
        counts = torch.bincount(labels, minlength=n_clusters)

        non_empty = counts > 0
        safe_counts = torch.where(non_empty, counts, torch.ones_like(counts))
        means = divide_mean(sums, safe_counts.unsqueeze(1), dtype=points.dtype)

        return torch.where(non_empty.unsqueeze(1), means, previous_centroids)
