"""
Device selection for point and centroid tensors.

Estimators leave data on the device it arrives on unless a device is
requested. Seeding always draws from a CPU generator, so a seeded run picks
the same initial centroids on every device.
"""

from typing import Optional, Union
import torch
import warnings


def get_default_device() -> torch.device:
    """Best available device: cuda, then mps, then cpu."""
    if torch.cuda.is_available():
        return torch.device('cuda')
    if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
        return torch.device('mps')
    return torch.device('cpu')


def parse_device(device: Optional[Union[str, torch.device]]) -> Optional[torch.device]:
    """Resolve a device request.

    Args:
        device: None (keep the data where it is), 'auto' (best available),
            'cpu', 'cuda', 'cuda:N', 'mps' or a torch.device

    Returns:
        The device to move data to, or None to leave it in place. An
        unavailable accelerator falls back to the CPU with a warning.
    """
    if device is None:
        return None
    if isinstance(device, torch.device):
        return device
    if not isinstance(device, str):
        raise TypeError(f"Device must be str or torch.device, got {type(device)}")

    if device == 'auto':
        return get_default_device()
    if device == 'cpu':
        return torch.device('cpu')
    if device.startswith('cuda'):
        if torch.cuda.is_available():
            return torch.device(device)
        warnings.warn(f"{device} requested but CUDA is not available; using CPU")
        return torch.device('cpu')
    if device == 'mps':
        if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
            return torch.device('mps')
        warnings.warn("mps requested but MPS is not available; using CPU")
        return torch.device('cpu')
    raise ValueError(f"Unknown device: {device}")
