"""Logging helpers."""

from .logging import DecisionLogger, WorkflowCommandFormatter, configure_logging, escape_data

__all__ = [
    "DecisionLogger",
    "WorkflowCommandFormatter",
    "configure_logging",
    "escape_data",
]
