"""Weighted tree representation."""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence, Tuple

import networkx as nx


@dataclass(frozen=True, eq=False)
class Vertex:
    """A tree vertex.

    Attributes:
        vertex_id: Stable identifier (1..N when read from input)
        weight: Non-negative cost paid when the walk visits this vertex
    """
    vertex_id: int
    weight: float

    def __post_init__(self):
        """Validate weight."""
        if self.weight < 0:
            raise ValueError(
                f"Vertex {self.vertex_id} has negative weight {self.weight}"
            )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.vertex_id == other.vertex_id

    def __hash__(self) -> int:
        return hash(self.vertex_id)

    def __repr__(self) -> str:
        return f"Vertex(id={self.vertex_id}, weight={self.weight})"


class Tree:
    """Undirected weighted tree stored as adjacency lists.

    Vertices are addressed two ways: by their external id, and by a dense
    position 0..N-1 assigned in insertion order. Engines work on positions;
    results are reported with ids. Insertion order is the iteration order
    used to break ties between equally cheap roots.

    The structure is not checked for cycles or connectivity. Engines assume
    a tree and their output on anything else is undefined.
    """

    def __init__(self):
        self._vertices: List[Vertex] = []
        self._positions: Dict[int, int] = {}
        self._adjacency: List[List[int]] = []
        self._num_edges = 0

    def add_vertex(self, vertex_id: int, weight: float) -> int:
        """Add a vertex and return its position."""
        if vertex_id in self._positions:
            raise ValueError(f"Duplicate vertex id {vertex_id}")
        vertex = Vertex(vertex_id=vertex_id, weight=float(weight))
        position = len(self._vertices)
        self._vertices.append(vertex)
        self._positions[vertex_id] = position
        self._adjacency.append([])
        return position

    def add_undirected_edge(self, a: int, b: int) -> None:
        """Connect vertices ``a`` and ``b`` (ids).

        Appends each endpoint to the other's neighbor list exactly once.
        Callers must not add the same unordered pair twice.
        """
        if a == b:
            raise ValueError(f"Self-loop on vertex {a} cannot be part of a tree")
        pa = self._positions[a]
        pb = self._positions[b]
        self._adjacency[pa].append(pb)
        self._adjacency[pb].append(pa)
        self._num_edges += 1

    @property
    def num_vertices(self) -> int:
        return len(self._vertices)

    @property
    def num_edges(self) -> int:
        return self._num_edges

    def is_empty(self) -> bool:
        return not self._vertices

    def position(self, vertex_id: int) -> int:
        """Get the dense position of a vertex id."""
        return self._positions[vertex_id]

    def vertex_id(self, position: int) -> int:
        return self._vertices[position].vertex_id

    def weight(self, position: int) -> float:
        return self._vertices[position].weight

    def weights(self) -> List[float]:
        """Weights in position order."""
        return [v.weight for v in self._vertices]

    def neighbors(self, position: int) -> Sequence[int]:
        """Neighbor positions of a vertex, in edge insertion order."""
        return self._adjacency[position]

    def neighbor_count(self, position: int) -> int:
        return len(self._adjacency[position])

    def unvisited_neighbor_count(self, position: int, visited: Sequence[int]) -> int:
        """Count neighbors not yet marked in ``visited``.

        Recomputed on every call in O(degree).
        """
        count = 0
        for neighbor in self._adjacency[position]:
            if not visited[neighbor]:
                count += 1
        return count

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Yield each undirected edge once as an (id, id) pair."""
        for position, neighbors in enumerate(self._adjacency):
            for neighbor in neighbors:
                if position < neighbor:
                    yield (self.vertex_id(position), self.vertex_id(neighbor))

    def to_networkx(self, weight_attr: str = "weight"):
        """Export as a ``networkx.Graph`` with weights as node attributes."""
        graph = nx.Graph()
        for vertex in self._vertices:
            graph.add_node(vertex.vertex_id, **{weight_attr: vertex.weight})
        graph.add_edges_from(self.edges())
        return graph

    def is_tree(self) -> bool:
        """Check connectivity and acyclicity (via networkx)."""
        if self.is_empty():
            return False
        if self._num_edges != len(self._vertices) - 1:
            return False
        return nx.is_tree(self.to_networkx())

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices)

    def __contains__(self, vertex_id: int) -> bool:
        return vertex_id in self._positions

    def __repr__(self) -> str:
        return f"Tree({self.num_vertices} vertices, {self.num_edges} edges)"

