"""Rooted DFS engine for expected traversal cost.

For a chosen root, the expected cost of a uniform random walk that visits
every vertex is accumulated post-order:

    cost(v) = weight(v) + sum(cost(c) for c in unvisited(v)) / len(unvisited(v))

where ``unvisited(v)`` is every neighbor of the root, or every neighbor
except the arrival one for any other vertex. A vertex with no unvisited
neighbors costs exactly its weight.

The all-roots search evaluates every vertex as root, so it is O(V^2).

Pruning is an approximate fast path. It abandons a root as soon as one
vertex's partial cost would exceed the best root cost found so far. That
rule is unsound: a subtree cost above the bound is still divided at its
ancestors and the root's final cost may end up below the bound. With
pruning on, the returned root is the best among the roots that survived,
which is not always the true minimum. Only ``prune=False`` is exact.
"""

import logging
import math
from typing import List, Optional

from ..errors import EmptyGraphError
from ..result import (
    DEFAULT_TOLERANCE,
    INVALID_COST,
    Deadline,
    SearchResult,
    is_invalid_cost,
    select_min,
)
from ..tree.model import Tree
from ..utils.logging import TRACE

logger = logging.getLogger(__name__)


class _Frame:
    """A vertex on the work stack whose children are being expanded."""

    __slots__ = ("position", "weight", "num_children", "next_index", "child_sum")

    def __init__(self, position: int, weight: float, num_children: int):
        self.position = position
        self.weight = weight
        # Fixed before any child is expanded
        self.num_children = num_children
        self.next_index = 0
        self.child_sum = 0.0

    def cost_with(self, extra: float) -> float:
        return self.weight + (self.child_sum + extra) / self.num_children

    def cost(self) -> float:
        return self.weight + self.child_sum / self.num_children


def _expected_cost_at(tree: Tree, root: int, bound: float) -> float:
    """Expected cost from position ``root``, or INVALID_COST if pruned.

    Uses an explicit stack, so tree depth is not limited by the interpreter's
    recursion limit. Child costs are summed in adjacency order, matching the
    recursive formulation exactly.
    """
    visited = bytearray(tree.num_vertices)

    num_children = tree.unvisited_neighbor_count(root, visited)
    if num_children == 0:
        return tree.weight(root)

    visited[root] = 1
    stack: List[_Frame] = [_Frame(root, tree.weight(root), num_children)]
    finished: Optional[float] = None

    while stack:
        frame = stack[-1]

        if finished is not None:
            child_cost = finished
            finished = None
            if is_invalid_cost(child_cost) or frame.cost_with(child_cost) > bound:
                return INVALID_COST
            frame.child_sum += child_cost

        neighbors = tree.neighbors(frame.position)
        child = -1
        while frame.next_index < len(neighbors):
            candidate = neighbors[frame.next_index]
            frame.next_index += 1
            if not visited[candidate]:
                child = candidate
                break

        if child < 0:
            stack.pop()
            finished = frame.cost()
            continue

        child_children = tree.unvisited_neighbor_count(child, visited)
        if child_children == 0:
            finished = tree.weight(child)
            continue

        visited[child] = 1
        stack.append(_Frame(child, tree.weight(child), child_children))

    return finished


def expected_cost(tree: Tree, root_id: int, bound: float = math.inf) -> float:
    """Expected cost of a random walk covering ``tree`` from ``root_id``.

    Args:
        tree: Tree to walk
        root_id: Starting vertex id
        bound: Prune threshold; ``inf`` gives the exact cost. A finite bound
            enables the approximate pruning rule and may return INVALID_COST

    Returns:
        Expected cost, or INVALID_COST when the walk was abandoned
    """
    if tree.is_empty():
        raise EmptyGraphError()
    return _expected_cost_at(tree, tree.position(root_id), bound)


def run_dfs(
    tree: Tree,
    prune: bool = False,
    tolerance: float = DEFAULT_TOLERANCE,
    deadline: Optional[Deadline] = None
) -> SearchResult:
    """Find the minimum expected cost root by evaluating every root.

    Args:
        tree: Tree to search
        prune: Enable the approximate pruning fast path
        tolerance: Slack used when comparing float costs for the minimum
        deadline: Optional budget checked before each root

    Returns:
        SearchResult with per-root costs of every fully evaluated root

    Raises:
        EmptyGraphError: If the tree has no vertices
    """
    if tree.is_empty():
        raise EmptyGraphError()

    ids: List[int] = []
    costs: List[float] = []
    best = math.inf
    pruned = 0

    for position in range(tree.num_vertices):
        if deadline is not None:
            deadline.check("dfs")

        cost = _expected_cost_at(tree, position, best if prune else math.inf)
        vertex_id = tree.vertex_id(position)

        if is_invalid_cost(cost):
            pruned += 1
            logger.debug(f"Early stop for vertex={vertex_id}")
            continue

        if logger.isEnabledFor(TRACE):
            logger.log(TRACE, f"ExpCost[{vertex_id}]={cost}")

        ids.append(vertex_id)
        costs.append(cost)
        if cost < best:
            best = cost

    vertex_id, cost = select_min(ids, costs, tolerance)
    method = "dfs-pruned" if prune else "dfs"
    logger.debug(f"{method}: min cost {cost} at vertex {vertex_id}, "
                 f"{pruned} roots pruned")

    return SearchResult(
        vertex_id=vertex_id,
        cost=cost,
        method=method,
        expected_costs=dict(zip(ids, costs)),
        pruned_roots=pruned,
    )
