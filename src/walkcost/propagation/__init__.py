"""Message-passing engine: expected cost for every root in one pass.

Each directed edge carries the expected cost its source contributes to a
walk arriving from the destination. Rounds of batch relaxation make the
messages exact from the leaves inward.
"""

from .edges import DirectedEdgeTable
from .engine import propagate, run_propagation, all_roots_min_cost

__all__ = [
    "DirectedEdgeTable",
    "propagate",
    "run_propagation",
    "all_roots_min_cost",
]
