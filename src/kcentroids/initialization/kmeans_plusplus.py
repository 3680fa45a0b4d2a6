"""
K-means++ initialization strategy.

Selects initial cluster centers using the K-means++ algorithm, which chooses
centers that are far apart to improve convergence speed and quality.
"""

from typing import List, Optional
import math
import warnings
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..distances.euclidean import distance_squared


class KMeansPlusPlusInit(InitializationStrategy):
    """K-means++ initialization for better starting positions.

    Algorithm:
    1. Choose first center uniformly at random
    2. For each remaining center:
       - Compute squared distance from each point to nearest existing center
       - Choose next center with probability proportional to that distance

    When every point already coincides with a chosen center the weights are
    all zero; the draw then falls back to a uniform choice.
    """

    def __init__(self, n_local_trials: Optional[int] = None, verbose: int = 0):
        """
        Args:
            n_local_trials: Number of candidates to try for each center,
                keeping the one that lowers the potential most. None or 1
                gives plain k-means++ (a single draw per center).
            verbose: Verbosity level
        """
        if n_local_trials is not None and n_local_trials < 1:
            raise ValueError(f"n_local_trials must be positive, got {n_local_trials}")
        self.n_local_trials = n_local_trials
        self.verbose = verbose
        self.last_indices_: List[int] = []

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Initialize cluster centers using K-means++.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            generator: CPU generator for every random draw

        Returns:
            (n_clusters, d) tensor of centers picked from ``points``
        """
        n_points = points.shape[0]

        if n_clusters <= 0:
            raise ValueError(f"n_clusters must be positive, got {n_clusters}")
        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

        n_local_trials = self.n_local_trials or 1

        # Choose first center uniformly at random
        first_idx = int(torch.randint(n_points, (1,), generator=generator).item())
        center_indices = [first_idx]

        # Squared distance to the nearest chosen center, in float64 so the
        # weights of integer data are exact enough to sample from
        distances = distance_squared(points, points[first_idx]).to(torch.float64)

        for c in range(1, n_clusters):
            weights = distances.cpu()
            total = weights.sum().item()
            if total > 0 and math.isfinite(total):
                probabilities = weights / total
            else:
                if self.verbose >= 2:
                    warnings.warn("All points coincide with chosen centers; "
                                  "sampling the next center uniformly")
                probabilities = torch.full((n_points,), 1.0 / n_points, dtype=torch.float64)

            candidates_idx = torch.multinomial(probabilities, n_local_trials,
                                               replacement=True, generator=generator)

            if n_local_trials == 1:
                best_candidate = int(candidates_idx[0].item())
            else:
                # Keep the candidate giving the lowest potential
                best_potential = float('inf')
                best_candidate = int(candidates_idx[0].item())
                for idx in candidates_idx.tolist():
                    candidate_distances = distance_squared(points, points[idx]).to(torch.float64)
                    potential = torch.minimum(distances, candidate_distances).sum().item()
                    if potential < best_potential:
                        best_potential = potential
                        best_candidate = idx

            center_indices.append(best_candidate)

            new_center_distances = distance_squared(points, points[best_candidate]).to(torch.float64)
            distances = torch.minimum(distances, new_center_distances)

        self.last_indices_ = center_indices
        index = torch.tensor(center_indices, dtype=torch.long, device=points.device)
        return points.index_select(0, index).clone()
