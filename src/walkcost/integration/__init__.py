"""Text input/output for problem instances."""

from .reader import ProblemReader, parse_problem, format_problem

__all__ = ["ProblemReader", "parse_problem", "format_problem"]
