"""Minimum expected traversal cost root for weighted trees.

A random walk starts at some vertex and visits every vertex of a tree,
moving at each step to a uniformly chosen unvisited neighbor and paying
each vertex's weight. The task is to find the start vertex with the lowest
expected total cost.

Components:
- tree/ - Weighted tree model, builders and reference fixtures
- dfs/ - Per-root post-order evaluation, exact and pruned (approximate)
- propagation/ - Message passing over directed edges, all roots at once
- comparison/ - Run both engines, check agreement, time them
- integration/ - Text problem format
"""

__version__ = "0.1.0"

from .config import SolverConfig, load_config
from .errors import EmptyGraphError, DeadlineExceededError
from .result import INVALID_COST, SearchResult
from .tree.model import Tree, Vertex
from .tree.builders import from_edges
from .dfs.engine import expected_cost, run_dfs
from .propagation.engine import run_propagation, all_roots_min_cost
from .comparison.comparator import compare_engines, run_engine

__all__ = [
    "SolverConfig",
    "load_config",
    "EmptyGraphError",
    "DeadlineExceededError",
    "INVALID_COST",
    "SearchResult",
    "Tree",
    "Vertex",
    "from_edges",
    "expected_cost",
    "run_dfs",
    "run_propagation",
    "all_roots_min_cost",
    "compare_engines",
    "run_engine",
    "solve",
]


def solve(weights, edges, **kwargs) -> SearchResult:
    """High-level API: minimum expected cost root of a tree.

    Args:
        weights: Per-vertex weights; vertex ids are 1..N in order
        edges: N - 1 undirected (id, id) pairs
        **kwargs: SolverConfig options (``method``, ``tolerance``, ...)

    Returns:
        SearchResult
    """
    config = SolverConfig(**kwargs)
    tree = from_edges(weights, edges)
    return run_engine(tree, config.method, config)
