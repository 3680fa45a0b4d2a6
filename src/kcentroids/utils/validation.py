"""
Input validation utilities.

Provides functions for validating data and configuration before clustering.
Every precondition of a run is checked here, before seeding starts.
"""

from typing import Optional, Union, Tuple, Sequence
import torch
from torch import Tensor
import numpy as np

from ..base.data_structures import MAX_RANDOM_SEED


SIGNED_DTYPES = (
    torch.float16,
    torch.bfloat16,
    torch.float32,
    torch.float64,
    torch.int8,
    torch.int16,
    torch.int32,
    torch.int64,
)


def check_signed_dtype(dtype: torch.dtype) -> None:
    """Require a signed arithmetic element type.

    Centroid movement and distance computations need negative differences,
    so unsigned, boolean and complex tensors are rejected.

    Raises:
        TypeError: If the dtype is not a signed real type
    """
    if dtype not in SIGNED_DTYPES:
        raise TypeError(f"Points must have a signed arithmetic dtype "
                        f"(float or signed int), got {dtype}")


def validate_data(X: Union[Tensor, np.ndarray, Sequence],
                  dtype: Optional[torch.dtype] = None,
                  device: Optional[torch.device] = None,
                  ensure_finite: bool = True,
                  ensure_min_samples: int = 1,
                  ensure_min_features: int = 1) -> Tensor:
    """Validate and convert input points to an (n, d) tensor.

    The element type of the input is kept unless ``dtype`` is given. Python
    floats become the default float dtype and Python ints int64, as with
    ``torch.as_tensor``.

    Args:
        X: Input data (tensor, numpy array, or nested sequence)
        dtype: Target data type (None keeps the input type)
        device: Target device (None keeps the input device)
        ensure_finite: Whether to check floating data for inf/nan
        ensure_min_samples: Minimum number of samples required
        ensure_min_features: Minimum number of features required

    Returns:
        Validated tensor

    Raises:
        TypeError: If the data cannot be converted or has an unsigned type
        ValueError: If the shape or values are invalid
    """
    if isinstance(X, Tensor):
        X = X.detach()
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(np.ascontiguousarray(X))
    elif isinstance(X, (list, tuple)):
        X = torch.as_tensor(X)
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    if dtype is not None or device is not None:
        X = X.to(dtype=dtype or X.dtype, device=device)

    check_signed_dtype(X.dtype)

    if X.dim() != 2:
        raise ValueError(f"Expected 2D array of points, got {X.dim()}D")

    n_samples, n_features = X.shape

    if n_samples < ensure_min_samples:
        raise ValueError(f"Found {n_samples} samples, but need at least "
                         f"{ensure_min_samples}")

    if n_features < ensure_min_features:
        raise ValueError(f"Found {n_features} features, but need at least "
                         f"{ensure_min_features}")

    if ensure_finite and X.is_floating_point():
        if torch.isnan(X).any():
            raise ValueError("Input contains NaN values")
        if torch.isinf(X).any():
            raise ValueError("Input contains infinite values")

    return X


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples

    Raises:
        TypeError: If n_clusters is not an int
        ValueError: If n_clusters is not positive or exceeds n_samples
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, int):
        raise TypeError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise ValueError(f"n_clusters must be positive, got {n_clusters}")

    if n_clusters > n_samples:
        raise ValueError(f"n_clusters ({n_clusters}) cannot be larger than "
                         f"n_samples ({n_samples})")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> Tuple[torch.Generator, int]:
    """Create the CPU generator driving a run.

    With no seed, one seed is drawn from the operating system's entropy
    source. A caller's generator supplies one draw that seeds a fresh
    generator, so the recorded seed replays the run even when the caller's
    generator was already advanced. Everything after that is a single
    deterministic stream.

    Args:
        random_state: Seed, generator, or None

    Returns:
        (generator, seed) where seed is the value the generator started from
    """
    if random_state is None:
        generator = torch.Generator()
        seed = generator.seed()
        return generator, seed
    elif isinstance(random_state, torch.Generator):
        seed = int(torch.randint(0, 2 ** 63 - 1, (1,), generator=random_state).item())
        generator = torch.Generator()
        generator.manual_seed(seed)
        return generator, seed
    elif isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        seed = int(random_state)
        if not 0 <= seed < MAX_RANDOM_SEED:
            raise ValueError(f"random_state must be in [0, 2**64), got {seed}")
        generator = torch.Generator()
        generator.manual_seed(seed)
        return generator, seed
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")


def check_array_consistency(*arrays: Tensor) -> None:
    """Check that arrays have the same number of rows.

    Args:
        *arrays: Tensors to check

    Raises:
        ValueError: If inconsistent
    """
    if len(arrays) < 2:
        return

    n_samples = None
    for i, arr in enumerate(arrays):
        if arr is None:
            continue

        if n_samples is None:
            n_samples = len(arr)
        elif len(arr) != n_samples:
            raise ValueError(f"Array {i} has {len(arr)} samples, "
                             f"expected {n_samples}")

