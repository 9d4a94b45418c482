"""Tree model: weighted vertices with symmetric adjacency."""

from .model import Vertex, Tree
from .builders import (
    Fixture,
    from_edges,
    from_networkx,
    star_fixture,
    five_vertex_fixture,
    chained_fixture,
    path_tree,
    get_fixture,
)

__all__ = [
    "Vertex",
    "Tree",
    "Fixture",
    "from_edges",
    "from_networkx",
    "star_fixture",
    "five_vertex_fixture",
    "chained_fixture",
    "path_tree",
    "get_fixture",
]
