"""Run both engines on the same tree and check they agree."""

from .comparator import (
    EngineRun,
    ComparisonReport,
    run_engine,
    compare_engines,
)

__all__ = [
    "EngineRun",
    "ComparisonReport",
    "run_engine",
    "compare_engines",
]
