"""Distance metrics for clustering algorithms."""

from .euclidean import (
    EuclideanDistance,
    distance,
    distance_squared,
    squared_distance_matrix
)

__all__ = [
    'EuclideanDistance',
    'distance',
    'distance_squared',
    'squared_distance_matrix'
]
