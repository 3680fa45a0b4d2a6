"""
Initialization from previous solution or custom centers.

Useful for warm starts, or to replay Lloyd's iterations from a known
starting point.
"""

from typing import Optional, Union, Sequence
import numpy as np
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import KMeansResult


class FromPreviousInit(InitializationStrategy):
    """Initialize from previous cluster centers or custom starting points.

    Accepts either:
    - A tensor, array or nested sequence of shape (n_clusters, dimension)
    - A KMeansResult from a previous run
    """

    def __init__(self, initial_state: Union[Tensor, np.ndarray, Sequence, KMeansResult]):
        """
        Args:
            initial_state: Previous solution to use for initialization
        """
        if isinstance(initial_state, KMeansResult):
            initial_state = initial_state.centroids
        self.initial_state = torch.as_tensor(initial_state)

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Initialize from previous state.

        Args:
            points: (n, d) data points (used for validation)
            n_clusters: Expected number of clusters
            generator: Ignored

        Returns:
            (n_clusters, d) copy of the stored centers in the dtype of points
        """
        dimension = points.shape[1]
        centers = self.initial_state

        if centers.dim() != 2:
            raise ValueError(f"Initial centers must be 2D, got {centers.dim()}D")
        if centers.shape[0] != n_clusters:
            raise ValueError(f"Initial centers has {centers.shape[0]} clusters, "
                             f"but n_clusters={n_clusters}")
        if centers.shape[1] != dimension:
            raise ValueError(f"Initial centers has dimension {centers.shape[1]}, "
                             f"but data has dimension {dimension}")

        return centers.to(device=points.device, dtype=points.dtype).clone()
