"""Logging setup."""

import logging
import sys
from typing import Optional, TextIO, Union

# Finer than DEBUG: per-vertex and per-message dumps
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def resolve_level(level: Union[int, str]) -> int:
    """Map a level name (``"info"``, ``"trace"``, ...) or number to a number."""
    if isinstance(level, int):
        return level
    name = level.upper()
    if name == "TRACE":
        return TRACE
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level '{level}'")
    return value


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None
):
    """Setup logging configuration.
    
    Args:
        level: Logging level (number or name, including ``"trace"``)
        log_file: Optional log file path
        stream: Console stream, stdout by default
    """
    handlers = [logging.StreamHandler(stream or sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    
    logging.basicConfig(
        level=resolve_level(level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )
