"""
K-means clustering algorithm.

Lloyd's algorithm with k-means++ seeding, implemented using the modular
framework, in a sequential and a fork-join parallel flavour.
"""

from typing import Optional, Union, Sequence
import numpy as np
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.interfaces import ClusteringObjective
from ..base.data_structures import ClusteringParameters, KMeansResult
from ..assignments.hard import HardAssignment
from ..distances.euclidean import distance_squared
from ..initialization.kmeans_plusplus import KMeansPlusPlusInit
from ..parallel.executor import ForkJoinExecutor, ParallelHardAssignment, ParallelMeanUpdater
from ..updates.mean import MeanUpdater


class KMeansObjective(ClusteringObjective):
    """K-means objective: sum of squared distances to centroids."""

    def compute(self, points: Tensor, centroids: Tensor,
                labels: Tensor) -> Tensor:
        """Compute within-cluster sum of squares."""
        assigned = centroids.index_select(0, labels)
        return distance_squared(points, assigned).sum()

    @property
    def minimize(self) -> bool:
        return True


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering algorithm.

    Partitions data into K clusters by minimizing within-cluster sum of
    squared distances with Lloyd's method. Only a local optimum is found.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    init : str or array-like, default='k-means++'
        Initialization method:
        - 'k-means++' : K-means++ initialization
        - 'random' : Random initialization
        - array of shape (n_clusters, n_features) : Use as initial centers
    max_iter : int, optional
        Maximum number of iterations. None or 0 means no cap.
    min_delta : float, optional
        Stop once no centroid moved farther than this distance
    verbose : int, default=0
        Verbosity level
    random_state : int or torch.Generator, optional
        Random seed for reproducibility. None draws one from the OS.
    device : str or torch.device, optional
        Device for computation (None keeps the data where it is)
    n_local_trials : int, optional
        Candidates per center for greedy k-means++ (None for plain k-means++)

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Cluster centroids, same dtype as the data
    labels_ : Tensor of shape (n_samples,)
        Cluster assignments for training data
    inertia_ : float
        Sum of squared distances to the assigned cluster center
    n_iter_ : int
        Number of iterations run
    stop_reason_ : StopReason
        Termination condition that ended the fit
    seed_ : int
        Seed the run actually used
    initial_centers_ : Tensor
        Centroids produced by seeding
    """

    def __init__(self,
                 n_clusters: int,
                 init: Union[str, Tensor, np.ndarray, Sequence] = 'k-means++',
                 max_iter: Optional[int] = None,
                 min_delta: Optional[float] = None,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[Union[str, torch.device]] = None,
                 n_local_trials: Optional[int] = None):
        """Initialize K-means algorithm."""
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            min_delta=min_delta,
            verbose=verbose,
            random_state=random_state,
            device=device
        )
        self.init = init
        self.n_local_trials = n_local_trials

    @classmethod
    def from_parameters(cls, parameters: ClusteringParameters, **kwargs) -> 'KMeans':
        """Build an estimator from a ClusteringParameters configuration."""
        return cls(
            n_clusters=parameters.k,
            max_iter=parameters.max_iteration,
            min_delta=parameters.min_delta,
            random_state=parameters.random_seed,
            **kwargs
        )

    def _create_initialization(self) -> None:
        if isinstance(self.init, str):
            if self.init == 'k-means++':
                self.initialization_strategy = KMeansPlusPlusInit(
                    n_local_trials=self.n_local_trials, verbose=self.verbose
                )
            elif self.init == 'random':
                from ..initialization.random import RandomInit
                self.initialization_strategy = RandomInit()
            else:
                raise ValueError(f"Unknown init method: {self.init}")
        else:
            # Custom initial centers provided
            from ..initialization.from_previous import FromPreviousInit
            self.initialization_strategy = FromPreviousInit(self.init)

    def _create_components(self) -> None:
        """Create K-means specific components."""
        self._create_initialization()
        self.assignment_strategy = HardAssignment()
        self.update_strategy = MeanUpdater()
        self.objective = KMeansObjective()

    @property
    def inertia_(self) -> float:
        """Within-cluster sum of squares of the fitted model."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return float(self.objective.compute(self._fit_data, self.cluster_centers_, self.labels_))

    def score(self, X: Tensor, y: Optional[Tensor] = None) -> float:
        """Opposite of the value of X on the K-means objective.

        Parameters
        ----------
        X : Tensor of shape (n_samples, n_features)
            New data
        y : Ignored
            Not used

        Returns
        -------
        score : float
            Negative of sum of squared distances to centers
        """
        labels = self.predict(X)
        X = self._validate_data(X)
        return -float(self.objective.compute(X, self.cluster_centers_, labels))

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params.update({'init': self.init, 'n_local_trials': self.n_local_trials})
        return params


class ParallelKMeans(KMeans):
    """K-means whose assignment and update steps run as fork-join tasks.

    Seeding and the convergence controller are shared with ``KMeans``, so a
    given seed produces the same initial centroids. Assignment is split
    into chunks of points; the update runs one task per cluster. Results
    match ``KMeans`` up to floating point summation order in the update
    (see ``kcentroids.parallel.executor``).

    Parameters
    ----------
    n_jobs : int, optional
        Worker threads (None for one per CPU)
    chunk_size : int, optional
        Points per assignment task (None for one chunk per worker)

    All other parameters are those of ``KMeans``.
    """

    def __init__(self,
                 n_clusters: int,
                 n_jobs: Optional[int] = None,
                 chunk_size: Optional[int] = None,
                 **kwargs):
        super().__init__(n_clusters=n_clusters, **kwargs)
        self.n_jobs = n_jobs
        self.chunk_size = chunk_size
        self._executor: Optional[ForkJoinExecutor] = None

    def _create_components(self) -> None:
        """Create components sharing one thread pool for the whole fit."""
        self._create_initialization()
        self._executor = ForkJoinExecutor(self.n_jobs)
        self.assignment_strategy = ParallelHardAssignment(self._executor, self.chunk_size)
        self.update_strategy = ParallelMeanUpdater(self._executor)
        self.objective = KMeansObjective()

    def _release_components(self) -> None:
        if self._executor is not None:
            self._executor.shutdown()

    def predict(self, X: Tensor) -> Tensor:
        """Predict cluster assignments with the parallel assignment step."""
        try:
            return super().predict(X)
        finally:
            self._release_components()

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params.update({'n_jobs': self.n_jobs, 'chunk_size': self.chunk_size})
        return params


def kmeans_lloyd(data: Union[Tensor, np.ndarray, Sequence],
                 parameters: ClusteringParameters) -> KMeansResult:
    """Cluster ``data`` with Lloyd's algorithm seeded by k-means++.

    Args:
        data: (n, d) points with a signed element type
        parameters: Run configuration

    Returns:
        KMeansResult(centroids, labels) of the last completed iteration
    """
    model = KMeans.from_parameters(parameters)
    model.fit(data)
    return model.result_


def kmeans_lloyd_parallel(data: Union[Tensor, np.ndarray, Sequence],
                          parameters: ClusteringParameters,
                          n_jobs: Optional[int] = None) -> KMeansResult:
    """Same as ``kmeans_lloyd`` with concurrent assignment and update steps.

    Args:
        data: (n, d) points with a signed element type
        parameters: Run configuration
        n_jobs: Worker threads (None for one per CPU)

    Returns:
        KMeansResult(centroids, labels) of the last completed iteration
    """
    model = ParallelKMeans.from_parameters(parameters, n_jobs=n_jobs)
    model.fit(data)
    return model.result_
