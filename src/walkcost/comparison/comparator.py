"""Engine comparison: run every engine on one tree, check agreement, time them.

The exact engines (unpruned DFS and message passing) must agree on the
minimum cost within tolerance, and on the winner or a vertex tied with it.
The pruned DFS is an approximation and is reported without taking part
in the verdict.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..config import SolverConfig
from ..dfs.engine import run_dfs
from ..propagation.engine import run_propagation
from ..result import SearchResult
from ..tree.model import Tree

logger = logging.getLogger(__name__)

EXACT_METHODS = ("dfs", "propagation")


def run_engine(tree: Tree, method: str, config: Optional[SolverConfig] = None) -> SearchResult:
    """Run one engine by name with settings from ``config``.

    Args:
        tree: Tree to search
        method: ``propagation``, ``dfs`` or ``dfs-pruned``
        config: Solver settings (defaults if None)

    Returns:
        SearchResult
    """
    config = config or SolverConfig()
    deadline = config.make_deadline()

    if method == "propagation":
        return run_propagation(
            tree,
            tolerance=config.tolerance,
            max_rounds=config.max_rounds,
            early_stop=config.early_stop,
            deadline=deadline,
        )
    if method in ("dfs", "dfs-pruned"):
        return run_dfs(
            tree,
            prune=(method == "dfs-pruned"),
            tolerance=config.tolerance,
            deadline=deadline,
        )
    raise ValueError(f"Unknown method '{method}'")


@dataclass
class EngineRun:
    """One engine's result and wall-clock time."""
    result: SearchResult
    wall_clock_time: float

    @property
    def method(self) -> str:
        return self.result.method

    def get_summary(self) -> Dict:
        """Get summary of this run."""
        summary = {
            'method': self.method,
            'vertex_id': self.result.vertex_id,
            'cost': self.result.cost,
            'wall_clock_time': self.wall_clock_time,
        }
        if self.result.rounds is not None:
            summary['rounds'] = self.result.rounds
            summary['converged'] = self.result.converged
        if self.method == "dfs-pruned":
            summary['pruned_roots'] = self.result.pruned_roots
        return summary


@dataclass
class ComparisonReport:
    """Outcome of running several engines on the same tree."""
    num_vertices: int
    tolerance: float
    runs: List[EngineRun] = field(default_factory=list)

    def get(self, method: str) -> Optional[EngineRun]:
        for run in self.runs:
            if run.method == method:
                return run
        return None

    @property
    def agree(self) -> bool:
        """Exact engines found the same minimum (winner equal or tied)."""
        exact = [run for run in self.runs if run.method in EXACT_METHODS]
        if len(exact) < 2:
            return True
        reference = exact[0].result
        for run in exact[1:]:
            other = run.result
            if abs(other.cost - reference.cost) > self.tolerance:
                return False
            if other.vertex_id != reference.vertex_id:
                # A different winner is fine if it is tied with the reference
                tied_cost = reference.expected_costs.get(other.vertex_id)
                if tied_cost is None or abs(tied_cost - reference.cost) > self.tolerance:
                    return False
        return True

    def format_table(self) -> str:
        """Render one line per engine."""
        lines = [f"{'method':<12} {'vertex':>8} {'cost':>16} {'seconds':>10}  notes"]
        for run in self.runs:
            notes = []
            if run.result.rounds is not None:
                notes.append(f"rounds={run.result.rounds}")
                notes.append(f"converged={run.result.converged}")
            if run.method == "dfs-pruned":
                notes.append(f"pruned={run.result.pruned_roots}")
            lines.append(
                f"{run.method:<12} {run.result.vertex_id:>8} "
                f"{run.result.cost:>16.6f} {run.wall_clock_time:>10.4f}  {' '.join(notes)}"
            )
        lines.append(f"agree: {self.agree}")
        return "\n".join(lines)


def compare_engines(tree: Tree, config: Optional[SolverConfig] = None) -> ComparisonReport:
    """Run DFS, optionally pruned DFS, and message passing on ``tree``.

    Args:
        tree: Tree to search (not modified)
        config: Solver settings

    Returns:
        ComparisonReport
    """
    config = config or SolverConfig()
    methods = ["dfs"]
    if config.compare_pruned:
        methods.append("dfs-pruned")
    methods.append("propagation")

    report = ComparisonReport(num_vertices=tree.num_vertices, tolerance=config.tolerance)
    for method in methods:
        start_time = time.perf_counter()
        result = run_engine(tree, method, config)
        elapsed = time.perf_counter() - start_time
        report.runs.append(EngineRun(result=result, wall_clock_time=elapsed))
        logger.info(f"{method}: vertex={result.vertex_id} cost={result.cost:.6f} "
                    f"time={elapsed:.4f}s")

    if not report.agree:
        logger.warning("Exact engines disagree: "
                       + ", ".join(f"{r.method}={r.result.vertex_id}/{r.result.cost}"
                                   for r in report.runs))
    return report
