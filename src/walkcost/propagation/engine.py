"""Iterative message passing: expected cost for all roots at once.

Instead of re-rooting the DFS V times, every directed edge j -> i carries
the expected cost j contributes to a walk that reached j from i:

    message(j -> i) = weight(j) + (sum_in(j) - message(i -> j)) / (deg(j) - 1)

The message i itself sent to j is excluded, as in belief propagation.
Messages start at weight(j), which is exact for leaves, and each round
makes them exact one level further from the leaves. A tree's diameter
bounds the rounds needed; V - 1 is the default budget.

Each round is a batch update: sums come from the previous round's
messages, and every new message is computed before any is stored.

Final cost of each vertex:

    cost(v) = weight(v) + sum_in(v) / deg(v)
"""

import logging
from typing import Optional

import numpy as np

from ..errors import EmptyGraphError
from ..result import DEFAULT_TOLERANCE, Deadline, SearchResult, select_min
from ..tree.model import Tree
from ..utils.logging import TRACE
from .edges import DirectedEdgeTable

logger = logging.getLogger(__name__)


def propagate(
    table: DirectedEdgeTable,
    tolerance: float = DEFAULT_TOLERANCE,
    max_rounds: Optional[int] = None,
    early_stop: bool = True,
    deadline: Optional[Deadline] = None
):
    """Run relaxation rounds over a directed-edge table.

    Args:
        table: Directed edges of the tree
        tolerance: A round "changes nothing" if no message moves by more
        max_rounds: Round budget (default V - 1)
        early_stop: Stop after the first round that changes nothing.
            With False, always run the full budget
        deadline: Optional budget checked before each round

    Returns:
        (messages, sum_in, rounds, converged)
    """
    if max_rounds is None:
        max_rounds = max(table.num_vertices - 1, 0)

    messages = table.initial_messages()
    sum_in = table.incoming_sums(messages)
    rounds = 0
    # Nothing to relax without edges
    converged = table.num_edges == 0

    while rounds < max_rounds:
        if deadline is not None:
            deadline.check(f"propagation round {rounds + 1}")

        new_messages = table.relax(messages, sum_in)
        delta = np.max(np.abs(new_messages - messages)) if len(messages) else 0.0
        messages = new_messages
        sum_in = table.incoming_sums(messages)
        rounds += 1
        converged = delta <= tolerance

        if logger.isEnabledFor(TRACE):
            for e in range(table.num_edges):
                logger.log(TRACE, f"Round {rounds}: c_{{{table.src[e]} -> "
                                  f"{table.dst[e]}}}={messages[e]:.1f}")

        if converged and early_stop:
            break

    logger.debug(f"Propagation finished after {rounds} rounds "
                 f"(converged={converged})")
    return messages, sum_in, rounds, bool(converged)


def run_propagation(
    tree: Tree,
    tolerance: float = DEFAULT_TOLERANCE,
    max_rounds: Optional[int] = None,
    early_stop: bool = True,
    deadline: Optional[Deadline] = None
) -> SearchResult:
    """Find the minimum expected cost root by message passing.

    Args:
        tree: Tree to search
        tolerance: Convergence and tie slack
        max_rounds: Round budget (default V - 1)
        early_stop: Stop as soon as a round changes nothing
        deadline: Optional budget checked before each round

    Returns:
        SearchResult with costs for every vertex

    Raises:
        EmptyGraphError: If the tree has no vertices
    """
    if tree.is_empty():
        raise EmptyGraphError()

    table = DirectedEdgeTable.from_tree(tree)
    _, sum_in, rounds, converged = propagate(
        table,
        tolerance=tolerance,
        max_rounds=max_rounds,
        early_stop=early_stop,
        deadline=deadline,
    )
    if not converged:
        logger.warning(f"Propagation did not converge within {rounds} rounds")

    costs = table.vertex_costs(sum_in).tolist()
    ids = [tree.vertex_id(p) for p in range(tree.num_vertices)]
    if logger.isEnabledFor(logging.DEBUG):
        for vertex_id, cost in zip(ids, costs):
            logger.debug(f"MinExpCost[{vertex_id}]={cost}")

    vertex_id, cost = select_min(ids, costs, tolerance)
    return SearchResult(
        vertex_id=vertex_id,
        cost=cost,
        method="propagation",
        expected_costs=dict(zip(ids, costs)),
        rounds=rounds,
        converged=converged,
    )


all_roots_min_cost = run_propagation
