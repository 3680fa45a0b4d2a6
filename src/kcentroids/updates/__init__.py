"""Parameter update strategies for clustering algorithms."""

from .mean import MeanUpdater, accumulator_dtype, divide_mean

__all__ = [
    'MeanUpdater',
    'accumulator_dtype',
    'divide_mean'
]
