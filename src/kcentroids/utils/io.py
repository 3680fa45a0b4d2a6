"""
Loading point data from delimited text files.
"""

from typing import Union
import os
import numpy as np
import torch
from torch import Tensor

from .validation import validate_data


def load_csv(path: Union[str, os.PathLike],
             dtype: torch.dtype = torch.float64,
             delimiter: str = ',') -> Tensor:
    """Load a comma separated file where each row is one point.

    Every row must have the same number of values.

    Args:
        path: File to read
        dtype: Element type of the returned tensor
        delimiter: Value separator

    Returns:
        (n, d) tensor of points
    """
    data = np.loadtxt(path, delimiter=delimiter, dtype=np.float64, ndmin=2)
    return validate_data(torch.from_numpy(data).to(dtype))
