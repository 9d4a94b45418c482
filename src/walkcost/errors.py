"""Exceptions raised by the expected-cost engines."""


class EmptyGraphError(ValueError):
    """Raised when an engine is asked to search a tree with no vertices."""

    def __init__(self, message: str = "Graph is empty"):
        super().__init__(message)


class DeadlineExceededError(RuntimeError):
    """Raised when a search runs past its configured deadline."""
