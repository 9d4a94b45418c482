"""Test the rooted DFS engine."""

import math
import sys

import pytest
from walkcost.dfs.engine import expected_cost, run_dfs
from walkcost.errors import EmptyGraphError
from walkcost.result import INVALID_COST, is_invalid_cost
from walkcost.tree.builders import from_edges, path_tree
from walkcost.tree.model import Tree


def _unsound_pruning_tree():
    """Tree where pruning discards the true minimum.

    Vertex 2 (weight 0) is the best root at 25: its heavy neighbor 3
    costs 100 but is averaged with three free leaves. After vertex 1 sets
    the bound to 100/3, the heavy subtree alone exceeds it and vertex 2 is
    abandoned.
    """
    weights = [0, 0, 100, 0, 0, 0]
    edges = [(1, 2), (2, 3), (3, 4), (2, 5), (2, 6)]
    return from_edges(weights, edges)


def test_star_costs(star):
    for vertex_id, cost in star.expected_costs.items():
        assert expected_cost(star.tree, vertex_id) == pytest.approx(cost)


def test_five_vertex_costs(five):
    """Per-root costs match the hand-derived values."""
    for vertex_id, cost in five.expected_costs.items():
        assert expected_cost(five.tree, vertex_id) == pytest.approx(cost, abs=1e-9)
    assert expected_cost(five.tree, 1) == pytest.approx(30 + (20 + (10 + 50) + 40) / 3.0)


def test_single_vertex():
    tree = from_edges([7.5], [])
    assert expected_cost(tree, 1) == 7.5
    result = run_dfs(tree)
    assert result.vertex_id == 1
    assert result.cost == 7.5


def test_run_dfs_star(star):
    result = run_dfs(star.tree)
    assert result.vertex_id == 1
    assert result.cost == pytest.approx(45.0)
    assert result.method == "dfs"
    assert result.expected_costs == pytest.approx(star.expected_costs)
    assert result.pruned_roots == 0


def test_run_dfs_five(five):
    result = run_dfs(five.tree)
    assert result.vertex_id == 3
    assert result.cost == pytest.approx(65.0)


def test_empty_graph():
    """Both entry points refuse an empty tree."""
    with pytest.raises(EmptyGraphError):
        run_dfs(Tree())
    with pytest.raises(EmptyGraphError):
        run_dfs(Tree(), prune=True)


def test_idempotent(five):
    """Visited state does not leak between runs."""
    first = run_dfs(five.tree)
    second = run_dfs(five.tree)
    assert first.vertex_id == second.vertex_id
    assert first.expected_costs == second.expected_costs
    assert expected_cost(five.tree, 3) == expected_cost(five.tree, 3)


def test_ties_go_to_first_vertex():
    """Equal costs: the earliest vertex in iteration order wins."""
    tree = from_edges([5, 5], [(1, 2)])
    result = run_dfs(tree)
    assert result.vertex_id == 1
    assert result.cost == 10.0


def test_deep_path_beyond_recursion_limit():
    """The explicit stack handles trees deeper than the recursion limit."""
    length = sys.getrecursionlimit() * 3
    tree = path_tree([1.0] * length)
    assert expected_cost(tree, 1) == pytest.approx(float(length))
    assert expected_cost(tree, length) == pytest.approx(float(length))


def test_pruning_matches_on_five(five):
    """On the five vertex tree the pruned search still finds vertex 3."""
    result = run_dfs(five.tree, prune=True)
    assert result.method == "dfs-pruned"
    assert result.vertex_id == 3
    assert result.cost == pytest.approx(65.0)
    # Roots 2, 4 and 5 are abandoned once the bound drops
    assert result.pruned_roots == 3
    assert set(result.expected_costs) == {1, 3}


def test_pruning_on_star(star):
    result = run_dfs(star.tree, prune=True)
    assert result.vertex_id == 1
    assert result.cost == pytest.approx(45.0)
    assert result.pruned_roots == 2


def test_expected_cost_with_bound_returns_marker(five):
    """A finite bound below a subtree's partial cost abandons the walk."""
    cost = expected_cost(five.tree, 2, bound=70.0)
    assert cost == INVALID_COST
    assert is_invalid_cost(cost)
    # Without a bound the exact value comes back
    assert expected_cost(five.tree, 2, bound=math.inf) == pytest.approx(100.0)


def test_pruning_is_approximate():
    """The pruning rule can discard the true minimum.

    The heuristic is kept as a fast path; only the unpruned search is exact.
    """
    tree = _unsound_pruning_tree()

    exact = run_dfs(tree)
    assert exact.vertex_id == 2
    assert exact.cost == pytest.approx(25.0)

    pruned = run_dfs(tree, prune=True)
    assert pruned.vertex_id == 1
    assert pruned.cost == pytest.approx(100.0 / 3.0)
    assert pruned.pruned_roots == 5
    # Still a real evaluated cost, never the sentinel
    assert not is_invalid_cost(pruned.cost)
    assert pruned.cost >= exact.cost
