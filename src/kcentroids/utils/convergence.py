"""
Termination criteria for Lloyd's algorithm.

Evaluated after every update step; any one of them is enough to stop:
- Centroids unchanged from the previous iteration
- Centroids equal to those from two iterations ago (2-cycle)
- Iteration cap reached
- Every centroid moved less than a minimum distance

Each check receives the dictionary produced by ``IterationState.as_dict``.
"""

from typing import Dict, Any, List, Optional, Union
import torch

from ..base.interfaces import ConvergenceCriterion
from ..base.data_structures import StopReason, ClusteringParameters
from ..distances.euclidean import distance


class CentroidsUnchanged(ConvergenceCriterion):
    """Exact (elementwise) equality with the previous centroid set."""

    reason = StopReason.CONVERGED

    def check(self, current_state: Dict[str, Any]) -> bool:
        return torch.equal(current_state['centroids'], current_state['previous'])


class TwoCycleOscillation(ConvergenceCriterion):
    """Exact equality with the centroid set from two iterations ago.

    Lloyd's method can alternate between two centroid sets forever; this
    makes that case terminal.
    """

    reason = StopReason.OSCILLATION

    def check(self, current_state: Dict[str, Any]) -> bool:
        two_ago = current_state.get('two_ago')
        if two_ago is None:
            return False
        return torch.equal(current_state['centroids'], two_ago)


class MaxIterations(ConvergenceCriterion):
    """Stop once the number of completed iterations reaches a cap."""

    reason = StopReason.MAX_ITERATION

    def __init__(self, max_iteration: int):
        """
        Args:
            max_iteration: Cap on completed iterations (must be positive)
        """
        super().__init__()
        if max_iteration <= 0:
            raise ValueError(f"max_iteration must be positive, got {max_iteration}")
        self.max_iteration = max_iteration

    def check(self, current_state: Dict[str, Any]) -> bool:
        # iteration is zero-based
        return current_state['iteration'] + 1 >= self.max_iteration


class MinCentroidShift(ConvergenceCriterion):
    """Stop when no centroid moved farther than ``min_delta``."""

    reason = StopReason.MIN_DELTA

    def __init__(self, min_delta: Union[int, float]):
        """
        Args:
            min_delta: Largest true Euclidean movement still considered
                converged
        """
        super().__init__()
        self.min_delta = min_delta

    def check(self, current_state: Dict[str, Any]) -> bool:
        shift = current_state.get('shift')
        if shift is None:
            shift = distance(current_state['centroids'], current_state['previous'])

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'max_shift': shift.max().item()
        })

        return bool((shift <= self.min_delta).all().item())


class CombinedCriterion(ConvergenceCriterion):
    """Combine multiple convergence criteria with AND/OR logic."""

    def __init__(self, criteria: List[ConvergenceCriterion],
                 mode: str = 'any'):
        """
        Args:
            criteria: List of convergence criteria, checked in order
            mode: 'any' (OR) or 'all' (AND)
        """
        super().__init__()
        self.criteria = criteria
        self.mode = mode
        self.triggered: Optional[ConvergenceCriterion] = None

        if mode not in ['any', 'all']:
            raise ValueError(f"Mode must be 'any' or 'all', got {mode}")

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check criteria in order and combine results.

        In 'any' mode the first criterion that fires is recorded in
        ``triggered``; later criteria are not evaluated.
        """
        self.triggered = None
        results = []
        for criterion in self.criteria:
            result = criterion.check(current_state)
            results.append(result)
            if result and self.triggered is None:
                self.triggered = criterion
                if self.mode == 'any':
                    break

        if self.mode == 'any':
            converged = any(results)
        else:
            converged = len(results) > 0 and all(results)

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'individual_results': results,
            'converged': converged
        })

        return converged

    @property
    def stop_reason(self) -> Optional[StopReason]:
        """Reason reported by the criterion that fired last check."""
        if self.triggered is None:
            return None
        return getattr(self.triggered, 'reason', None)

    def reset(self):
        """Reset all sub-criteria."""
        super().reset()
        self.triggered = None
        for criterion in self.criteria:
            criterion.reset()


def build_termination_criterion(parameters: ClusteringParameters) -> CombinedCriterion:
    """Termination checks for a run, in priority order."""
    criteria: List[ConvergenceCriterion] = [CentroidsUnchanged(), TwoCycleOscillation()]
    if parameters.has_max_iteration:
        criteria.append(MaxIterations(parameters.max_iteration))
    if parameters.has_min_delta:
        criteria.append(MinCentroidShift(parameters.min_delta))
    return CombinedCriterion(criteria, mode='any')
