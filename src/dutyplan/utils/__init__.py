"""Utilities package for the duty planner."""
from .logging_setup import (
    TRACE,
    RunLogger,
    get_logger,
    log_constraint,
    log_function_call,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_function_call",
    "log_constraint",
    "RunLogger",
    "TRACE",
]
