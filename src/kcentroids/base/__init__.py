"""Base classes and interfaces for k-centroids clustering algorithms."""

from .interfaces import (
    AssignmentStrategy,
    ParameterUpdater,
    DistanceMetric,
    InitializationStrategy,
    ConvergenceCriterion,
    ClusteringObjective
)

from .data_structures import (
    ClusteringParameters,
    KMeansResult,
    AssignmentMatrix,
    IterationState,
    RunPhase,
    StopReason
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'AssignmentStrategy',
    'ParameterUpdater',
    'DistanceMetric',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'ClusteringObjective',

    # Data structures
    'ClusteringParameters',
    'KMeansResult',
    'AssignmentMatrix',
    'IterationState',
    'RunPhase',
    'StopReason',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
