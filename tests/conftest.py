"""Pytest fixtures for testing."""

import sys
from pathlib import Path

import pytest
import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from walkcost.tree.builders import (  # noqa: E402
    chained_fixture,
    five_vertex_fixture,
    from_edges,
    star_fixture,
)


@pytest.fixture
def star():
    """Three vertex star: center 30, leaves 20 and 10."""
    return star_fixture()


@pytest.fixture
def five():
    """Five vertex tree, weights [30, 20, 10, 40, 50]."""
    return five_vertex_fixture()


@pytest.fixture
def chain_of_five():
    """Factory for k chained copies of the five vertex tree."""
    return chained_fixture


def make_random_tree(num_vertices: int, rng: np.random.Generator, max_weight: int = 100):
    """Random labelled tree: vertex i attaches to a uniformly chosen earlier vertex."""
    weights = rng.integers(0, max_weight + 1, size=num_vertices).tolist()
    edges = [(i + 1, int(rng.integers(0, i)) + 1) for i in range(1, num_vertices)]
    return from_edges(weights, edges)


@pytest.fixture
def random_tree():
    """Factory for seeded random trees."""
    def factory(num_vertices: int, seed: int = 0, max_weight: int = 100):
        return make_random_tree(num_vertices, np.random.default_rng(seed), max_weight)
    return factory
