"""Solver configuration."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .result import DEFAULT_TOLERANCE, Deadline

METHODS = ("propagation", "dfs", "dfs-pruned")


@dataclass
class SolverConfig:
    """Configuration for the expected-cost search.

    Attributes:
        method: Engine used by ``solve``: propagation, dfs or dfs-pruned
        tolerance: Float slack for convergence and minimum selection
        max_rounds: Message-passing round budget; None means V - 1
        early_stop: Stop message passing once a round changes nothing.
            False runs the full budget every time
        deadline_seconds: Optional wall-clock budget per engine run
        validate_tree: Reject non-tree input when reading problems
        compare_pruned: Include the pruned DFS in engine comparisons
        log_level: Logging level name
    """
    method: str = "propagation"
    tolerance: float = DEFAULT_TOLERANCE
    max_rounds: Optional[int] = None
    early_stop: bool = True
    deadline_seconds: Optional[float] = None
    validate_tree: bool = False
    compare_pruned: bool = True
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate fields."""
        if self.method not in METHODS:
            raise ValueError(f"method must be one of {METHODS}, got '{self.method}'")
        if self.tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        if self.max_rounds is not None and self.max_rounds < 0:
            raise ValueError(f"max_rounds must be >= 0, got {self.max_rounds}")
        if self.deadline_seconds is not None and self.deadline_seconds <= 0:
            raise ValueError(
                f"deadline_seconds must be positive, got {self.deadline_seconds}"
            )

    def make_deadline(self) -> Optional[Deadline]:
        """Start a fresh deadline, or None when unbounded."""
        if self.deadline_seconds is None:
            return None
        return Deadline(self.deadline_seconds)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SolverConfig':
        """Build from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)


def load_config(path: Union[str, Path]) -> SolverConfig:
    """Load a SolverConfig from a YAML file.

    The file may hold the settings at top level or under a ``solver`` key.
    An empty file gives the defaults.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must be a mapping")
    if "solver" in data:
        data = data["solver"] or {}
    return SolverConfig.from_dict(data)
