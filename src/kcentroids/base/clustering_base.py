"""
Base class for clustering algorithms in the k-centroids package.

Provides the convergence controller of Lloyd's algorithm: seeding, then
alternating assignment and update steps until a termination condition
fires. Subclasses only choose the components.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, Union
import torch
from torch import Tensor
import time
import warnings

from .interfaces import (
    AssignmentStrategy, ParameterUpdater,
    InitializationStrategy, ClusteringObjective
)
from .data_structures import (
    AssignmentMatrix, ClusteringParameters, IterationState, KMeansResult,
    RunPhase, StopReason
)
from ..distances.euclidean import distance
from ..utils.convergence import build_termination_criterion
from ..utils.device import parse_device
from ..utils.validation import validate_data, check_n_clusters, check_random_state


class BaseClusteringAlgorithm:
    """Base class implementing the seeding / assign / update loop.

    Subclasses need to specify:
    - Initialization strategy
    - Assignment strategy
    - Parameter update strategy
    - Objective function

    The controller moves through ``RunPhase.SEEDED`` -> ``ITERATING`` ->
    ``DONE``. Each iteration assigns labels from the current centroids,
    shifts the current set to ``previous`` (and the previous one to
    ``two_ago``), then computes new centroids from those labels. It stops
    when the new centroids equal the previous set, equal the set from two
    iterations ago, the iteration cap is reached, or every centroid moved
    no more than ``min_delta``.
    """

    def __init__(self,
                 n_clusters: int,
                 max_iter: Optional[int] = None,
                 min_delta: Optional[float] = None,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[Union[str, torch.device]] = None):
        """
        Args:
            n_clusters: Number of clusters K
            max_iter: Maximum iterations (None or 0 for no cap)
            min_delta: Stop once no centroid moves farther than this
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Seed or generator for reproducible seeding
                (None draws a seed from the operating system)
            device: Torch device (None keeps the data where it is,
                'auto' picks the best available)
        """
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.min_delta = min_delta
        self.verbose = verbose
        self.random_state = random_state
        self.device = parse_device(device)

        # These will be set by subclasses
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.update_strategy: Optional[ParameterUpdater] = None
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.objective: Optional[ClusteringObjective] = None

        # Algorithm state
        self.fitted_ = False
        self.phase_: Optional[RunPhase] = None
        self.n_iter_ = 0
        self.stop_reason_: Optional[StopReason] = None
        self.seed_: Optional[int] = None
        self.initial_centers_: Optional[Tensor] = None
        self.labels_: Optional[Tensor] = None
        self._centers: Optional[Tensor] = None
        self._fit_data: Optional[Tensor] = None

    @abstractmethod
    def _create_components(self) -> None:
        """Create algorithm-specific components.

        Subclasses must implement this to instantiate:
        - self.initialization_strategy
        - self.assignment_strategy
        - self.update_strategy
        - self.objective
        """
        pass

    def _release_components(self) -> None:
        """Free resources held by the components once a fit ends."""
        pass

    def get_clustering_parameters(self) -> ClusteringParameters:
        """Validated run configuration built from the estimator parameters."""
        seed = self.random_state if isinstance(self.random_state, int) else None
        return ClusteringParameters(
            k=self.n_clusters,
            max_iteration=self.max_iter,
            min_delta=self.min_delta,
            random_seed=seed
        )

    def fit(self, X: Tensor, y: Optional[Tensor] = None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            X: (n, d) data tensor
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        return self._fit(X)

    def fit_predict(self, X: Tensor, y: Optional[Tensor] = None) -> Tensor:
        """Fit and return the labels of the last iteration.

        Args:
            X: (n, d) data tensor
            y: Ignored

        Returns:
            (n,) tensor of cluster assignments
        """
        self._fit(X)
        return self.labels_

    def predict(self, X: Tensor) -> Tensor:
        """Predict cluster assignments for new data.

        Args:
            X: (n, d) data tensor

        Returns:
            (n,) tensor of cluster assignments
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

        X = self._validate_data(X)
        if X.shape[1] != self._centers.shape[1]:
            raise ValueError(f"Expected dimension {self._centers.shape[1]}, got {X.shape[1]}")

        assignments = self.assignment_strategy.compute_assignments(X, self._centers)
        return AssignmentMatrix(assignments, self.n_clusters).labels

    def _fit(self, X: Tensor) -> 'BaseClusteringAlgorithm':
        """Internal fit method implementing the convergence controller."""
        # Configuration and data preconditions, before any computation
        parameters = self.get_clustering_parameters()
        X = self._validate_data(X)
        n_points, dimension = X.shape
        check_n_clusters(parameters.k, n_points)

        generator, seed = check_random_state(self.random_state)
        self.seed_ = seed

        self._create_components()
        criterion = build_termination_criterion(parameters)

        self.fitted_ = False
        self.n_iter_ = 0
        self.stop_reason_ = None
        self._fit_data = None

        if self.verbose:
            print(f"Initializing {parameters.k} clusters (seed={seed})...")

        start_time = time.time()
        try:
            centroids = self.initialization_strategy.initialize(
                X, parameters.k, generator=generator
            )
            self.initial_centers_ = centroids
            self.phase_ = RunPhase.SEEDED

            previous: Optional[Tensor] = None
            two_ago: Optional[Tensor] = None
            iteration = 0
            self.phase_ = RunPhase.ITERATING

            while True:
                iter_start_time = time.time()

                # Assignment step
                labels = self.assignment_strategy.compute_assignments(X, centroids)

                # Keep two generations for the cycle check
                two_ago = previous
                previous = centroids

                # Update step
                centroids = self.update_strategy.update(X, labels, previous)

                state = IterationState(
                    iteration=iteration,
                    centroids=centroids,
                    labels=labels,
                    previous=previous,
                    two_ago=two_ago,
                    shift=distance(centroids, previous)
                )
                stop = criterion.check(state.as_dict())
                iteration += 1

                # Logging
                iter_time = time.time() - iter_start_time
                if self.verbose >= 2 or (self.verbose >= 1 and (iteration - 1) % 10 == 0):
                    objective_value = self.objective.compute(X, centroids, labels)
                    obj_direction = "↓" if self.objective.minimize else "↑"
                    max_shift = state.shift.max().item()
                    print(f"Iteration {iteration - 1:3d}: objective = {float(objective_value):.6f} "
                          f"{obj_direction} max shift = {max_shift:.6f} ({iter_time:.3f}s)")

                if stop:
                    break
        finally:
            self._release_components()

        self.phase_ = RunPhase.DONE
        self.n_iter_ = iteration
        self.stop_reason_ = criterion.stop_reason
        self._centers = centroids
        self.labels_ = labels
        self._fit_data = X
        self.fitted_ = True

        total_time = time.time() - start_time

        if self.verbose:
            if self.converged_:
                print(f"Converged at iteration {iteration - 1} ({self.stop_reason_.value})")
            else:
                warnings.warn(f"Failed to converge after {self.n_iter_} iterations")
            print(f"Total fitting time: {total_time:.3f}s")

        return self

    def _validate_data(self, X: Tensor) -> Tensor:
        """Validate and prepare input data."""
        return validate_data(X, device=self.device)

    @property
    def converged_(self) -> bool:
        """Whether the last fit stopped at an (approximate) fixed point."""
        if self.stop_reason_ is None:
            return False
        return self.stop_reason_.is_converged

    @property
    def cluster_centers_(self) -> Tensor:
        """Get cluster centers."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self._centers

    @property
    def result_(self) -> KMeansResult:
        """Centroids and labels of the last fit."""
        return KMeansResult(self.cluster_centers_, self.labels_)

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'min_delta': self.min_delta,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'device': self.device
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        for key, value in params.items():
            if key == 'device':
                value = parse_device(value)
            setattr(self, key, value)
        return self
