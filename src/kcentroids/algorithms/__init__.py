"""Clustering algorithm implementations."""

from .kmeans import (
    KMeans,
    ParallelKMeans,
    KMeansObjective,
    kmeans_lloyd,
    kmeans_lloyd_parallel
)

__all__ = [
    'KMeans',
    'ParallelKMeans',
    'KMeansObjective',
    'kmeans_lloyd',
    'kmeans_lloyd_parallel'
]
