"""Assignment strategies for clustering algorithms."""

from .hard import HardAssignment, nearest_centroid

__all__ = [
    'HardAssignment',
    'nearest_centroid'
]
