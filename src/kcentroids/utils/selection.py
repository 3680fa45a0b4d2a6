"""
Best-of-N selection over repeated k-means runs.
"""

from typing import Optional, Union, Sequence
import numpy as np
import torch
from torch import Tensor

from ..base.data_structures import ClusteringParameters, KMeansResult
from .metrics import inertia
from .validation import validate_data, check_random_state


def get_best_means(points: Union[Tensor, np.ndarray, Sequence],
                   k: int,
                   n_init: int = 10,
                   random_state: Optional[Union[int, torch.Generator]] = None,
                   parallel: bool = False,
                   max_iteration: Optional[int] = None,
                   min_delta: Optional[float] = None) -> KMeansResult:
    """Run k-means ``n_init`` times and keep the lowest-inertia result.

    Each run gets its own seed drawn from one generator, so the whole
    selection is reproducible when ``random_state`` is given. Inertia is
    the sum of true distances to the assigned centroid; the first run wins
    ties.

    Args:
        points: (n, d) data
        k: Number of clusters
        n_init: Number of runs
        random_state: Seed or generator for the per-run seeds
        parallel: Use the concurrent assignment/update steps
        max_iteration: Optional iteration cap for every run
        min_delta: Optional movement threshold for every run

    Returns:
        The best KMeansResult
    """
    from ..algorithms.kmeans import kmeans_lloyd, kmeans_lloyd_parallel

    if n_init < 1:
        raise ValueError(f"n_init must be positive, got {n_init}")

    X = validate_data(points)
    generator, _ = check_random_state(random_state)
    run = kmeans_lloyd_parallel if parallel else kmeans_lloyd

    best_result = None
    best_inertia = float('inf')

    for _ in range(n_init):
        # Non-negative 63-bit seed per run
        seed = int(torch.randint(0, 2 ** 63 - 1, (1,), generator=generator).item())
        parameters = ClusteringParameters(k=k, max_iteration=max_iteration,
                                          min_delta=min_delta, random_seed=seed)
        result = run(X, parameters)
        current = inertia(X, result.labels, result.centroids)
        if best_result is None or current < best_inertia:
            best_result = result
            best_inertia = current

    return best_result
