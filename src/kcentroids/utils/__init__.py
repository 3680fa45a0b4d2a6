"""Utility functions for k-centroids."""

from .convergence import (
    CentroidsUnchanged,
    TwoCycleOscillation,
    MaxIterations,
    MinCentroidShift,
    CombinedCriterion,
    build_termination_criterion
)

from .metrics import (
    dist_to_center,
    sum_dist,
    get_cluster,
    inertia,
    predict
)

from .validation import (
    SIGNED_DTYPES,
    check_signed_dtype,
    validate_data,
    check_n_clusters,
    check_random_state,
    check_array_consistency
)

from .device import (
    get_default_device,
    parse_device
)

from .io import load_csv

from .selection import get_best_means

__all__ = [
    # Convergence criteria
    'CentroidsUnchanged',
    'TwoCycleOscillation',
    'MaxIterations',
    'MinCentroidShift',
    'CombinedCriterion',
    'build_termination_criterion',

    # Metrics
    'dist_to_center',
    'sum_dist',
    'get_cluster',
    'inertia',
    'predict',

    # Validation
    'SIGNED_DTYPES',
    'check_signed_dtype',
    'validate_data',
    'check_n_clusters',
    'check_random_state',
    'check_array_consistency',

    # Device management
    'get_default_device',
    'parse_device',

    # Data loading and run selection
    'load_csv',
    'get_best_means'
]
