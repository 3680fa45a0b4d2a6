"""Concurrent variants of the assignment and update steps."""

from .executor import (
    ForkJoinExecutor,
    ParallelHardAssignment,
    ParallelMeanUpdater,
    chunk_bounds,
    default_n_jobs
)

__all__ = [
    'ForkJoinExecutor',
    'ParallelHardAssignment',
    'ParallelMeanUpdater',
    'chunk_bounds',
    'default_n_jobs'
]
