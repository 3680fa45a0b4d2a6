"""
k-centroids: k-means clustering with Lloyd's algorithm on PyTorch tensors.

This package implements:
- K-means++ seeding (optionally greedy)
- Lloyd iterations with exact fixed-point and 2-cycle detection
- A fork-join parallel variant of the assignment and update steps
- Inertia, cluster membership and best-of-N helpers

Example usage:
    >>> import torch
    >>> from kcentroids import KMeans
    >>>
    >>> # Generate sample data
    >>> X = torch.randn(1000, 10)
    >>>
    >>> # Fit K-means
    >>> kmeans = KMeans(n_clusters=5, random_state=0, verbose=1)
    >>> kmeans.fit(X)
    >>>
    >>> # Get cluster assignments
    >>> labels = kmeans.predict(X)

Functional form:
    >>> from kcentroids import ClusteringParameters, kmeans_lloyd
    >>> centroids, labels = kmeans_lloyd(X, ClusteringParameters(k=5, random_seed=7))
"""

__version__ = '0.1.0'

# Import main algorithms
from .algorithms.kmeans import (
    KMeans,
    ParallelKMeans,
    kmeans_lloyd,
    kmeans_lloyd_parallel
)

# Convenience imports
from .base import (
    ClusteringParameters,
    KMeansResult,
    AssignmentMatrix,
    RunPhase,
    StopReason
)

from .utils import (
    inertia,
    get_cluster,
    predict,
    get_best_means,
    load_csv
)

__all__ = [
    # Algorithms
    'KMeans',
    'ParallelKMeans',
    'kmeans_lloyd',
    'kmeans_lloyd_parallel',

    # Core data structures
    'ClusteringParameters',
    'KMeansResult',
    'AssignmentMatrix',
    'RunPhase',
    'StopReason',

    # Utilities
    'inertia',
    'get_cluster',
    'predict',
    'get_best_means',
    'load_csv',

    # Version
    '__version__'
]
