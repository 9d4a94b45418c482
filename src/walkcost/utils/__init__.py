"""Shared utilities."""

from .logging import TRACE, setup_logging

__all__ = ["TRACE", "setup_logging"]
