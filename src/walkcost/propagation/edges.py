"""Dense directed-edge table for message passing."""

from dataclasses import dataclass

import numpy as np

from ..tree.model import Tree


@dataclass
class DirectedEdgeTable:
    """Every undirected edge as two integer-indexed directed edges.

    Edge ``e`` carries a message from ``src[e]`` to ``dst[e]``; ``reverse[e]``
    is the id of the opposite direction. Edges are numbered by walking
    vertices in position order and each adjacency list in order, so
    ``src`` is sorted.

    Attributes:
        src: (E,) source position of each directed edge
        dst: (E,) destination position
        reverse: (E,) id of dst -> src
        weights: (V,) vertex weights
        degree: (V,) neighbor counts
    """
    src: np.ndarray
    dst: np.ndarray
    reverse: np.ndarray
    weights: np.ndarray
    degree: np.ndarray

    @property
    def num_vertices(self) -> int:
        return len(self.weights)

    @property
    def num_edges(self) -> int:
        return len(self.src)

    @classmethod
    def from_tree(cls, tree: Tree) -> 'DirectedEdgeTable':
        """Build the table from a tree's adjacency lists."""
        num_vertices = tree.num_vertices
        degree = np.array(
            [tree.neighbor_count(p) for p in range(num_vertices)], dtype=np.int64
        )
        # offsets[p] is the id of the first edge leaving p
        offsets = np.zeros(num_vertices + 1, dtype=np.int64)
        np.cumsum(degree, out=offsets[1:])
        num_edges = int(offsets[-1])

        src = np.repeat(np.arange(num_vertices, dtype=np.int64), degree)
        dst = np.empty(num_edges, dtype=np.int64)
        reverse = np.empty(num_edges, dtype=np.int64)

        edge_id = {}
        for position in range(num_vertices):
            base = offsets[position]
            for slot, neighbor in enumerate(tree.neighbors(position)):
                e = int(base + slot)
                dst[e] = neighbor
                edge_id[(position, neighbor)] = e

        for (a, b), e in edge_id.items():
            reverse[e] = edge_id[(b, a)]

        weights = np.asarray(tree.weights(), dtype=np.float64)
        return cls(src=src, dst=dst, reverse=reverse, weights=weights, degree=degree)

    def initial_messages(self) -> np.ndarray:
        """Seed every message u -> v with weight(u)."""
        return self.weights[self.src].copy()

    def incoming_sums(self, messages: np.ndarray) -> np.ndarray:
        """Sum of all messages arriving at each vertex."""
        return np.bincount(self.dst, weights=messages, minlength=self.num_vertices)

    def relax(self, messages: np.ndarray, sum_in: np.ndarray) -> np.ndarray:
        """Compute next round's messages from a snapshot.

        For edge j -> i:

            weight(j) + (sum_in(j) - message(i -> j)) / (deg(j) - 1)

        or just ``weight(j)`` when j is a leaf. Returns a new array; the
        inputs are not modified.
        """
        src_degree = self.degree[self.src]
        excluded = sum_in[self.src] - messages[self.reverse]
        spread = np.where(
            src_degree >= 2,
            excluded / np.maximum(src_degree - 1, 1),
            0.0,
        )
        return self.weights[self.src] + spread

    def vertex_costs(self, sum_in: np.ndarray) -> np.ndarray:
        """Expected cost of starting at each vertex."""
        return self.weights + np.where(
            self.degree > 0, sum_in / np.maximum(self.degree, 1), 0.0
        )
