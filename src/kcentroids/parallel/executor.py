"""
Fork-join execution of the assignment and update steps.

Both steps of Lloyd's algorithm split into independent tasks that read
shared, read-only tensors and write disjoint outputs:

- assignment: contiguous chunks of points, each task writing its own slice
  of the label vector;
- update: one task per cluster, each scanning the full label vector and
  producing only its own centroid.

Every call submits all tasks and waits for all of them before returning, so
the controller never observes a partially computed label vector or centroid
set. PyTorch kernels release the GIL, which lets a thread pool run the
tasks concurrently.

The per-cluster update sums each cluster with ``Tensor.sum`` while
``MeanUpdater`` accumulates with ``index_add_``. For floating point data the
two orders differ by at most about ``n_c * eps * max|x|`` per coordinate for
a cluster of ``n_c`` points; for integer data they are identical.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, TypeVar
import os
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, ParameterUpdater
from ..assignments.hard import nearest_centroid
from ..updates.mean import accumulator_dtype, divide_mean

T = TypeVar('T')
R = TypeVar('R')


def default_n_jobs() -> int:
    """Number of workers used when none is requested."""
    return os.cpu_count() or 1


class ForkJoinExecutor:
    """Thread pool with a join barrier after every batch of tasks.

    One pool is reused across iterations of a fit; close it with
    ``shutdown`` or use the executor as a context manager.
    """

    def __init__(self, n_jobs: Optional[int] = None):
        """
        Args:
            n_jobs: Number of worker threads (None for one per CPU)
        """
        if n_jobs is None:
            n_jobs = default_n_jobs()
        if n_jobs < 1:
            raise ValueError(f"n_jobs must be positive, got {n_jobs}")
        self.n_jobs = n_jobs
        self._pool: Optional[ThreadPoolExecutor] = None

    def _get_pool(self) -> ThreadPoolExecutor:
        if self._pool is None:
            self._pool = ThreadPoolExecutor(max_workers=self.n_jobs,
                                            thread_name_prefix='kcentroids')
        return self._pool

    def map_join(self, fn: Callable[[T], R], tasks: Iterable[T]) -> List[R]:
        """Run ``fn`` on every task and wait for all of them.

        Results are returned in task order. The first exception raised by a
        task is re-raised here, after every task has finished.
        """
        pool = self._get_pool()
        futures = [pool.submit(fn, task) for task in tasks]
        # Barrier: wait for everything before surfacing any failure
        for future in futures:
            future.exception()
        return [future.result() for future in futures]

    def shutdown(self) -> None:
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None

    def __enter__(self) -> 'ForkJoinExecutor':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.shutdown()


def chunk_bounds(n_items: int, n_chunks: int) -> List[range]:
    """Split ``range(n_items)`` into at most ``n_chunks`` contiguous ranges."""
    n_chunks = max(1, min(n_chunks, n_items))
    base, extra = divmod(n_items, n_chunks)
    bounds = []
    start = 0
    for i in range(n_chunks):
        stop = start + base + (1 if i < extra else 0)
        bounds.append(range(start, stop))
        start = stop
    return bounds


class ParallelHardAssignment(AssignmentStrategy):
    """Nearest-centroid assignment split into chunks of points."""

    def __init__(self, executor: ForkJoinExecutor, chunk_size: Optional[int] = None):
        """
        Args:
            executor: Pool running the tasks
            chunk_size: Points per task (None for one chunk per worker)
        """
        if chunk_size is not None and chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.executor = executor
        self.chunk_size = chunk_size

    def compute_assignments(self, points: Tensor, centroids: Tensor,
                            **kwargs) -> Tensor:
        n_points = points.shape[0]
        labels = torch.empty(n_points, dtype=torch.long, device=points.device)

        if self.chunk_size is None:
            n_chunks = self.executor.n_jobs
        else:
            n_chunks = -(-n_points // self.chunk_size)

        def assign_chunk(rows: range) -> None:
            # Each task owns labels[rows]; nothing else is written
            labels[rows.start:rows.stop] = nearest_centroid(
                points[rows.start:rows.stop], centroids
            )

        self.executor.map_join(assign_chunk, chunk_bounds(n_points, n_chunks))
        return labels


class ParallelMeanUpdater(ParameterUpdater):
    """Centroid update with one independent task per cluster.

    Every task scans all labels to select its own points, so the total work
    is O(k * n) instead of the single O(n) pass of ``MeanUpdater``.
    """

    def __init__(self, executor: ForkJoinExecutor):
        self.executor = executor

    def update(self, points: Tensor, labels: Tensor,
               previous_centroids: Tensor, **kwargs) -> Tensor:
        n_clusters = previous_centroids.shape[0]

        def cluster_mean(cluster_idx: int) -> Tensor:
            mask = labels == cluster_idx
            count = int(mask.sum().item())
            if count == 0:
                return previous_centroids[cluster_idx].clone()
            cluster_sum = points[mask].sum(dim=0, dtype=accumulator_dtype(points.dtype))
            return divide_mean(cluster_sum, torch.tensor(count, device=points.device),
                               dtype=points.dtype)

        means = self.executor.map_join(cluster_mean, range(n_clusters))
        return torch.stack(means)
