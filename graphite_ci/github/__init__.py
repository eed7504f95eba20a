"""GitHub Actions integration: run context, step I/O and run cancellation."""

from .client import GitHubClient, RunCanceller
from .context import load_run_context, read_event_file
from .core import ActionsCore

__all__ = [
    "ActionsCore",
    "GitHubClient",
    "RunCanceller",
    "load_run_context",
    "read_event_file",
]
