"""Search results shared by both engines."""

from dataclasses import dataclass, field
import time
from typing import Dict, Optional, Sequence, Tuple

from .errors import DeadlineExceededError

# Reserved "no valid cost" marker. Legitimate costs are sums of
# non-negative weights, so any negative value is invalid.
INVALID_COST = -1.0

DEFAULT_TOLERANCE = 1e-6


def is_invalid_cost(cost: float) -> bool:
    """Check the sentinel with ``<`` rather than ``==`` on a float."""
    return cost < 0


@dataclass
class SearchResult:
    """Winning root of a search.

    Attributes:
        vertex_id: Id of the minimum expected cost vertex
        cost: Its expected cost
        method: Engine that produced the result
        expected_costs: vertex_id -> expected cost for every root the
            engine fully evaluated
        pruned_roots: Roots abandoned by the pruning heuristic
        rounds: Relaxation rounds run (message passing only)
        converged: Whether the last round changed nothing (message passing only)
    """
    vertex_id: int
    cost: float
    method: str
    expected_costs: Dict[int, float] = field(default_factory=dict)
    pruned_roots: int = 0
    rounds: Optional[int] = None
    converged: Optional[bool] = None

    def __repr__(self) -> str:
        return (f"SearchResult(method={self.method}, vertex={self.vertex_id}, "
                f"cost={self.cost:.6f})")


def select_min(
    ids: Sequence[int],
    costs: Sequence[float],
    tolerance: float = DEFAULT_TOLERANCE
) -> Tuple[int, float]:
    """Pick the first vertex whose cost is within ``tolerance`` of the minimum.

    Args:
        ids: Vertex ids in iteration order
        costs: Matching costs
        tolerance: Absolute slack for treating two float sums as equal

    Returns:
        (vertex_id, cost)
    """
    if not ids:
        raise ValueError("No candidates to select from")
    best = min(costs)
    for vertex_id, cost in zip(ids, costs):
        if cost <= best + tolerance:
            return vertex_id, float(cost)
    # Only reachable when costs contain NaN
    raise ValueError(f"Cannot select a minimum from costs {list(costs)}")


class Deadline:
    """Wall-clock budget checked between units of work."""

    def __init__(self, seconds: Optional[float] = None):
        self.seconds = seconds
        self._expires = None if seconds is None else time.monotonic() + seconds

    def check(self, where: str = "") -> None:
        """Raise DeadlineExceededError once the budget is spent."""
        if self._expires is not None and time.monotonic() > self._expires:
            raise DeadlineExceededError(
                f"Deadline of {self.seconds}s exceeded{' during ' + where if where else ''}"
            )
