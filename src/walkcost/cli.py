#!/usr/bin/env python3
"""Command-line entry point.

Usage:
    walkcost solve --input problem.txt
    walkcost solve --method dfs --show_cost < problem.txt
    walkcost compare --fixture chain --copies 550
    walkcost fixture five > five.txt
"""

import argparse
import logging
import sys
from typing import List, Optional

from .comparison.comparator import compare_engines, run_engine
from .config import METHODS, SolverConfig, load_config
from .errors import DeadlineExceededError, EmptyGraphError
from .integration.reader import ProblemReader, format_problem
from .tree.builders import get_fixture
from .tree.model import Tree
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="walkcost",
        description="Find the tree vertex with minimum expected random-walk cost"
    )
    parser.add_argument("--config", type=str, default=None,
                        help="YAML config file")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for DEBUG, -vv for TRACE")
    parser.add_argument("--log_file", type=str, default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve = subparsers.add_parser("solve", help="Print the winning vertex id")
    solve.add_argument("--input", type=str, default=None,
                       help="Problem file (default: stdin)")
    solve.add_argument("--method", choices=METHODS, default=None,
                       help="Engine (default from config: propagation)")
    solve.add_argument("--show_cost", action="store_true",
                       help="Also print the expected cost")

    compare = subparsers.add_parser("compare", help="Run and time every engine")
    source = compare.add_mutually_exclusive_group()
    source.add_argument("--input", type=str, default=None,
                        help="Problem file (default: stdin)")
    source.add_argument("--fixture", type=str, default=None,
                        help="Built-in fixture: star3, five or chain")
    compare.add_argument("--copies", type=int, default=1,
                         help="Number of five-vertex copies for --fixture chain")
    compare.add_argument("--no_pruned", action="store_true",
                         help="Skip the pruned DFS")

    fixture = subparsers.add_parser("fixture", help="Print a built-in fixture as input text")
    fixture.add_argument("name", type=str)
    fixture.add_argument("--copies", type=int, default=1)

    return parser


def _load_tree(path: Optional[str], config: SolverConfig) -> Tree:
    reader = ProblemReader(validate_tree=config.validate_tree)
    if path is None:
        return reader.read(sys.stdin)
    return reader.read_file(path)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else SolverConfig()
    except (OSError, ValueError) as e:
        parser.error(f"Invalid config: {e}")
    if args.verbose >= 2:
        level = "TRACE"
    elif args.verbose == 1:
        level = "DEBUG"
    else:
        level = config.log_level
    # Results go to stdout, logs to stderr
    setup_logging(level, log_file=args.log_file, stream=sys.stderr)

    try:
        if args.command == "solve":
            tree = _load_tree(args.input, config)
            method = args.method or config.method
            result = run_engine(tree, method, config)
            logger.debug(f"{result}")
            if args.show_cost:
                print(f"{result.vertex_id} {result.cost}")
            else:
                print(result.vertex_id)

        elif args.command == "compare":
            if args.fixture:
                tree = get_fixture(args.fixture, copies=args.copies).tree
            else:
                tree = _load_tree(args.input, config)
            if args.no_pruned:
                config.compare_pruned = False
            logger.info(f"Comparing engines on {tree}")
            report = compare_engines(tree, config)
            print(report.format_table())
            if not report.agree:
                return 2

        elif args.command == "fixture":
            tree = get_fixture(args.name, copies=args.copies).tree
            sys.stdout.write(format_problem(tree))

    except (EmptyGraphError, DeadlineExceededError, ValueError, KeyError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
