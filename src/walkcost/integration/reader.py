"""Problem reader: whitespace-separated text -> Tree.

Format::

    N
    w_1 w_2 ... w_N
    a_1 b_1
    ...
    a_{N-1} b_{N-1}

Vertex ids are 1..N in the order the weights appear. Line breaks are not
significant; only the token sequence is.
"""

from pathlib import Path
from typing import Iterator, List, TextIO, Union

from ..tree.model import Tree


class ProblemReader:
    """Reader for the N / weights / edges text format.

    Args:
        validate_tree: Also check the result is connected and acyclic
    """

    def __init__(self, validate_tree: bool = False):
        self.validate_tree = validate_tree

    def parse(self, text: str) -> Tree:
        """Parse a problem from a string."""
        tokens = iter(text.split())

        num_vertices = self._next_int(tokens, "vertex count")
        if num_vertices < 0:
            raise ValueError(f"Vertex count must be >= 0, got {num_vertices}")

        tree = Tree()
        for vertex_id in range(1, num_vertices + 1):
            weight = self._next_number(tokens, f"weight of vertex {vertex_id}")
            tree.add_vertex(vertex_id, weight)

        for i in range(max(num_vertices - 1, 0)):
            a = self._next_int(tokens, f"edge {i + 1}")
            b = self._next_int(tokens, f"edge {i + 1}")
            for vertex_id in (a, b):
                if not 1 <= vertex_id <= num_vertices:
                    raise ValueError(
                        f"Edge {i + 1} references vertex {vertex_id}, "
                        f"expected 1..{num_vertices}"
                    )
            tree.add_undirected_edge(a, b)

        leftover = list(tokens)
        if leftover:
            raise ValueError(f"Unexpected trailing input: {leftover[:5]}")

        if self.validate_tree and num_vertices > 0 and not tree.is_tree():
            raise ValueError("Input graph is not a tree")

        return tree

    def read(self, stream: TextIO) -> Tree:
        """Parse a problem from an open text stream."""
        return self.parse(stream.read())

    def read_file(self, file_path: Union[str, Path]) -> Tree:
        """Parse a problem from a file."""
        with open(file_path, 'r') as f:
            return self.read(f)

    @staticmethod
    def _next_token(tokens: Iterator[str], what: str) -> str:
        try:
            return next(tokens)
        except StopIteration:
            raise ValueError(f"Unexpected end of input while reading {what}") from None

    def _next_int(self, tokens: Iterator[str], what: str) -> int:
        token = self._next_token(tokens, what)
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"Expected integer for {what}, got '{token}'") from None

    def _next_number(self, tokens: Iterator[str], what: str) -> float:
        token = self._next_token(tokens, what)
        try:
            return float(token)
        except ValueError:
            raise ValueError(f"Expected number for {what}, got '{token}'") from None


def parse_problem(text: str, validate_tree: bool = False) -> Tree:
    """Parse a problem string into a Tree."""
    return ProblemReader(validate_tree=validate_tree).parse(text)


def _format_weight(weight: float) -> str:
    if weight.is_integer():
        return str(int(weight))
    return repr(weight)


def format_problem(tree: Tree) -> str:
    """Serialize a tree with ids 1..N back into the text format."""
    lines: List[str] = [str(tree.num_vertices)]
    lines.append(" ".join(_format_weight(w) for w in tree.weights()))
    for a, b in tree.edges():
        lines.append(f"{a} {b}")
    return "\n".join(lines) + "\n"
