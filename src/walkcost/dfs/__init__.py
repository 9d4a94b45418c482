"""Rooted DFS engine: per-root expected cost by post-order accumulation."""

from .engine import expected_cost, run_dfs

__all__ = [
    "expected_cost",
    "run_dfs",
]
