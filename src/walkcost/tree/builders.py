"""Tree construction helpers and reference fixtures.

The fixtures are small trees with hand-derived expected costs, used by the
test suite and by ``walkcost compare --fixture``.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import networkx as nx

from .model import Tree


@dataclass
class Fixture:
    """A reference tree with its known per-vertex expected costs.

    Attributes:
        name: Fixture name
        tree: The tree
        expected_costs: vertex_id -> exact expected cost (may be empty when
            only the engines' agreement is known)
    """
    name: str
    tree: Tree
    expected_costs: Dict[int, float] = field(default_factory=dict)

    @property
    def min_cost(self) -> Optional[float]:
        if not self.expected_costs:
            return None
        return min(self.expected_costs.values())


def from_edges(
    weights: Sequence[float],
    edges: Iterable[Tuple[int, int]],
    start_id: int = 1
) -> Tree:
    """Build a tree from per-vertex weights and an id-pair edge list.

    Args:
        weights: One weight per vertex; vertex ids are assigned
            ``start_id, start_id + 1, ...`` in order
        edges: Undirected (id, id) pairs
        start_id: Id of the first vertex

    Returns:
        Tree
    """
    tree = Tree()
    for offset, weight in enumerate(weights):
        tree.add_vertex(start_id + offset, weight)
    for a, b in edges:
        tree.add_undirected_edge(a, b)
    return tree


def from_networkx(graph: nx.Graph, weight_attr: str = "weight") -> Tree:
    """Build a tree from a networkx graph carrying weights as node attributes.

    Nodes are added in the graph's node order, which becomes the tie-break
    order of the engines.
    """
    tree = Tree()
    for node, data in graph.nodes(data=True):
        if weight_attr not in data:
            raise ValueError(f"Node {node} has no '{weight_attr}' attribute")
        tree.add_vertex(node, data[weight_attr])
    for a, b in graph.edges():
        tree.add_undirected_edge(a, b)
    return tree


def _add_star(tree: Tree, start_id: int) -> None:
    tree.add_vertex(start_id, 30)
    tree.add_vertex(start_id + 1, 20)
    tree.add_vertex(start_id + 2, 10)
    tree.add_undirected_edge(start_id, start_id + 1)
    tree.add_undirected_edge(start_id, start_id + 2)


def _add_five(tree: Tree, start_id: int) -> None:
    for offset, weight in enumerate([30, 20, 10, 40, 50]):
        tree.add_vertex(start_id + offset, weight)
    # {1,2} {1,3} {1,4} {3,5}
    tree.add_undirected_edge(start_id, start_id + 1)
    tree.add_undirected_edge(start_id, start_id + 2)
    tree.add_undirected_edge(start_id, start_id + 3)
    tree.add_undirected_edge(start_id + 2, start_id + 4)


def star_fixture(start_id: int = 1) -> Fixture:
    """Three vertices: center weight 30, leaves 20 and 10."""
    tree = Tree()
    _add_star(tree, start_id)
    expected = {
        start_id: 30 + (20 + 10) / 2.0,
        start_id + 1: 20 + 30 + 10,
        start_id + 2: 10 + 30 + 20,
    }
    return Fixture(name="star3", tree=tree, expected_costs=expected)


def five_vertex_fixture(start_id: int = 1) -> Fixture:
    """Five vertices, weights [30, 20, 10, 40, 50], edges {1,2},{1,3},{1,4},{3,5}."""
    tree = Tree()
    _add_five(tree, start_id)
    w1, w2, w3, w4, w5 = 30, 20, 10, 40, 50
    expected = {
        start_id: w1 + (w2 + (w3 + w5) + w4) / 3.0,
        start_id + 1: w2 + (w1 + ((w3 + w5) + w4) / 2.0),
        start_id + 2: w3 + (w5 + (w1 + (w2 + w4) / 2.0)) / 2.0,
        start_id + 3: w4 + (w1 + (w2 + (w3 + w5)) / 2.0),
        start_id + 4: w5 + (w3 + (w1 + (w2 + w4) / 2.0)),
    }
    return Fixture(name="five", tree=tree, expected_costs=expected)


def chained_fixture(copies: int) -> Fixture:
    """Chain ``copies`` five-vertex fixtures by linking their first vertices.

    Copy ``k`` uses ids ``5k+1 .. 5k+5``; the first vertex of copy ``k`` is
    joined to the first vertex of copy ``k+1``.
    """
    if copies < 1:
        raise ValueError(f"copies must be >= 1, got {copies}")
    tree = Tree()
    previous_root = None
    for k in range(copies):
        start_id = 5 * k + 1
        _add_five(tree, start_id)
        if previous_root is not None:
            tree.add_undirected_edge(previous_root, start_id)
        previous_root = start_id
    expected = five_vertex_fixture().expected_costs if copies == 1 else {}
    return Fixture(name=f"chain{copies}", tree=tree, expected_costs=expected)


def path_tree(weights: Sequence[float], start_id: int = 1) -> Tree:
    """A chain ``start_id - start_id+1 - ...`` with the given weights."""
    edges: List[Tuple[int, int]] = [
        (start_id + i, start_id + i + 1) for i in range(len(weights) - 1)
    ]
    return from_edges(weights, edges, start_id=start_id)


FIXTURES = {
    "star3": star_fixture,
    "five": five_vertex_fixture,
}


def get_fixture(name: str, copies: int = 1) -> Fixture:
    """Look up a fixture by name (``star3``, ``five`` or ``chain``)."""
    if name == "chain":
        return chained_fixture(copies)
    if name not in FIXTURES:
        raise ValueError(
            f"Unknown fixture '{name}', expected one of {sorted(FIXTURES) + ['chain']}"
        )
    return FIXTURES[name]()
