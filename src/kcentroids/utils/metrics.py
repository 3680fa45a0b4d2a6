"""
Quality scores and projections over a clustering result.

These are stateless helpers layered on top of the core: inertia for
comparing runs, cluster membership queries, and nearest-centroid
prediction for new points.
"""

from typing import Union
import torch
from torch import Tensor

from ..distances.euclidean import distance, distance_squared
from ..assignments.hard import nearest_centroid
from .validation import check_array_consistency


def dist_to_center(points: Tensor, center: Tensor) -> Tensor:
    """True Euclidean distance from every point to ``center``.

    Args:
        points: (n, d) points (n may be zero)
        center: (d,) center

    Returns:
        (n,) floating tensor of distances
    """
    return distance(points, center.unsqueeze(0))


def sum_dist(points: Tensor, center: Tensor) -> float:
    """Sum of true distances from every point to ``center`` (0 for no points)."""
    if points.shape[0] == 0:
        return 0.0
    return dist_to_center(points, center).sum().item()


def get_cluster(points: Tensor, labels: Tensor, label: int) -> Tensor:
    """Rows of ``points`` whose label equals ``label``, in input order.

    A label that no point carries gives an empty (0, d) tensor.
    """
    check_array_consistency(points, labels)
    return points[labels == label]


def inertia(X: Tensor, labels: Tensor, centers: Tensor, squared: bool = False) -> float:
    """Sum of distances from each point to its assigned center.

    Args:
        X: (n, d) data points
        labels: (n,) cluster labels
        centers: (k, d) cluster centers
        squared: Sum squared distances (within-cluster sum of squares)
            instead of true distances

    Returns:
        Total inertia (lower is better)
    """
    check_array_consistency(X, labels)
    total = 0.0
    n_clusters = centers.shape[0]

    for k in range(n_clusters):
        cluster_points = get_cluster(X, labels, k)
        if cluster_points.shape[0] == 0:
            continue
        if squared:
            total += distance_squared(cluster_points, centers[k]).sum().item()
        else:
            total += sum_dist(cluster_points, centers[k])

    return total


def predict(centroids: Tensor, query: Tensor) -> Union[int, Tensor]:
    """Index of the centroid closest to ``query``.

    Args:
        centroids: (k, d) centroids
        query: (d,) single point or (m, d) batch

    Returns:
        An int for a single point, an (m,) tensor for a batch. Ties go to
        the lowest index.
    """
    if query.dim() == 1:
        return int(nearest_centroid(query.unsqueeze(0), centroids)[0].item())
    return nearest_centroid(query, centroids)
