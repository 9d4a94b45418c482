"""Test the message-passing engine."""

import time

import pytest
import numpy as np
from walkcost.errors import DeadlineExceededError, EmptyGraphError
from walkcost.propagation.edges import DirectedEdgeTable
from walkcost.propagation.engine import propagate, run_propagation
from walkcost.result import Deadline
from walkcost.tree.builders import from_edges, path_tree
from walkcost.tree.model import Tree


def test_star(star):
    result = run_propagation(star.tree)
    assert result.vertex_id == 1
    assert result.cost == pytest.approx(45.0)
    assert result.expected_costs == pytest.approx(star.expected_costs)
    assert result.method == "propagation"
    assert result.converged


def test_five(five):
    result = run_propagation(five.tree)
    assert result.vertex_id == 3
    assert result.cost == pytest.approx(65.0)
    assert result.expected_costs[1] == pytest.approx(30 + (20 + (10 + 50) + 40) / 3.0)
    assert result.expected_costs == pytest.approx(five.expected_costs)


def test_single_vertex():
    result = run_propagation(from_edges([3.0], []))
    assert result.vertex_id == 1
    assert result.cost == 3.0
    assert result.rounds == 0
    assert result.converged


def test_two_vertices_need_one_round():
    """Leaf messages are exact from the start."""
    result = run_propagation(from_edges([1, 2], [(1, 2)]))
    assert result.rounds == 1
    assert result.converged
    assert result.expected_costs == {1: 3.0, 2: 3.0}


def test_empty_graph():
    with pytest.raises(EmptyGraphError):
        run_propagation(Tree())


@pytest.mark.parametrize("length", [3, 4, 7, 12])
def test_path_converges_within_diameter(length):
    """A chain of L vertices converges in at most L - 1 rounds."""
    weights = [float(w) for w in range(1, length + 1)]
    tree = path_tree(weights)
    result = run_propagation(tree)
    assert result.converged
    assert result.rounds <= length - 1

    # One more round after the fixed budget changes nothing
    table = DirectedEdgeTable.from_tree(tree)
    messages, sums, rounds, _ = propagate(table, max_rounds=length - 1, early_stop=False)
    assert rounds == length - 1
    again = table.relax(messages, sums)
    assert np.max(np.abs(again - messages)) <= 1e-9


def test_fixed_rounds_match_early_stop(five):
    """Running the full budget gives the same answer as stopping early."""
    early = run_propagation(five.tree, early_stop=True)
    fixed = run_propagation(five.tree, early_stop=False)
    assert fixed.rounds == five.tree.num_vertices - 1
    assert early.rounds <= fixed.rounds
    assert fixed.vertex_id == early.vertex_id
    assert fixed.expected_costs == pytest.approx(early.expected_costs)


def test_round_budget_too_small():
    """Stopping before convergence is reported, not hidden."""
    tree = path_tree([1.0] * 10)
    result = run_propagation(tree, max_rounds=2)
    assert result.rounds == 2
    assert not result.converged


def test_idempotent(five):
    first = run_propagation(five.tree)
    second = run_propagation(five.tree)
    assert first.expected_costs == second.expected_costs
    assert first.rounds == second.rounds


def test_ties_go_to_first_vertex():
    """Symmetric path: vertices 2 and 3 tie, the earlier one wins."""
    tree = path_tree([1, 5, 5, 1])
    result = run_propagation(tree)
    assert result.expected_costs[2] == pytest.approx(8.5)
    assert result.expected_costs[3] == pytest.approx(8.5)
    assert result.vertex_id == 2


def test_deadline_exceeded():
    tree = path_tree([1.0] * 50)
    deadline = Deadline(1e-6)
    time.sleep(0.01)
    with pytest.raises(DeadlineExceededError):
        run_propagation(tree, deadline=deadline)
