# tests/utils.py
"""
Small, reusable helpers used across the k-centroids test suite.

Functions:
- to_numpy(x): tensor or array-like to numpy.
- sorted_rows(C): rows of a centroid matrix in lexicographic order.
- labels_equal_up_to_perm(y1, y2, K): same partition, possibly renumbered.
- relabel_to_reference(y_pred, y_ref): map predicted labels onto reference ids.
- time_block(label, meta=None): context manager that prints wall-clock time.
- print_timing(label, seconds, **meta): convenience printer for timings.
"""

from __future__ import annotations

import itertools
import json
import time
from contextlib import contextmanager
from typing import Any, Dict

import numpy as np
import torch


def to_numpy(x: Any) -> np.ndarray:
    """Convert a tensor (any device) or array-like to numpy."""
    if isinstance(x, torch.Tensor):
        return x.detach().cpu().numpy()
    return np.asarray(x)


def sorted_rows(C: Any) -> np.ndarray:
    """
    Rows of a 2D array sorted lexicographically (first column first).

    Centroid order depends on seeding; sorting makes results comparable.
    """
    C_np = to_numpy(C)
    if C_np.ndim != 2:
        raise ValueError(f"Expected 2D array, got shape {C_np.shape}")
    order = np.lexsort(C_np.T[::-1])
    return C_np[order]


def labels_equal_up_to_perm(y1: Any, y2: Any, K: int) -> bool:
    """Return True if y2 can be renumbered to equal y1 exactly."""
    a = to_numpy(y1)
    b = to_numpy(y2)
    if a.shape != b.shape:
        return False
    for perm in itertools.permutations(range(K)):
        mapping = np.array(perm)
        if np.array_equal(a, mapping[b]):
            return True
    return False


def relabel_to_reference(y_pred: Any, y_ref: Any) -> np.ndarray:
    """
    Rename predicted labels after the reference label of their first point.

    Only meaningful when both labelings describe the same partition.
    """
    p = to_numpy(y_pred)
    r = to_numpy(y_ref)
    mapping = {}
    for a, b in zip(p.tolist(), r.tolist()):
        mapping.setdefault(a, b)
    return np.array([mapping[a] for a in p.tolist()], dtype=np.int64)


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Output
    ------
    [timing] fit {"n":400,"d":3,"K":2} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.
    """
    meta_str = ""
    if meta:
        meta_str = " " + json.dumps(meta, separators=(",", ":"), default=str)
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
