"""
Structured logging for the Graphite CI action.

``DecisionLogger`` prefixes every message with the fields needed to debug a
run from its workflow log (policy, repository, PR, status). The
``WorkflowCommandFormatter`` renders records as GitHub workflow commands so
warnings and errors are annotated in the Actions UI.
"""

import logging
import sys
import time
import uuid
from contextlib import contextmanager
from typing import Optional

from ..models.context import RunContext

_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def escape_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandFormatter(logging.Formatter):
    """Format records as ``::warning::message`` style workflow commands."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


def configure_logging(verbose: bool = False, stream=None) -> logging.Handler:
    """
    Route ``graphite_ci`` loggers to the workflow log.

    Args:
        verbose: Emit debug records as well
        stream: Target stream (defaults to stdout, which the runner parses)

    Returns:
        The installed handler
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(WorkflowCommandFormatter("%(message)s"))

    root = logging.getLogger("graphite_ci")
    for existing in list(root.handlers):
        if isinstance(existing.formatter, WorkflowCommandFormatter):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.propagate = False
    return handler


class DecisionLogger:
    """Structured logger bound to one policy and run context."""

    def __init__(self, policy: str, context: Optional[RunContext] = None):
        """
        Args:
            policy: Name of the decision policy (e.g. "gate", "optimizer")
            context: Run context whose repository/PR is attached to messages
        """
        self.policy = policy
        self.context = context
        self.logger = logging.getLogger(f"graphite_ci.requester.{policy}")

    def _format_message(self, message: str, **kwargs) -> str:
        fields = [f"policy={self.policy}"]
        if self.context is not None:
            fields.append(f"repo={self.context.repository.full_name}")
            if self.context.pr is not None:
                fields.append(f"pr={self.context.pr}")

        for key, value in kwargs.items():
            if value is not None:
                fields.append(f"{key}={value}")

        return f"[{' '.join(fields)}] {message}"

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs):
        self.logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, status: Optional[int] = None, **kwargs):
        """Log a warning; ``status`` is the decision-service response status."""
        self.logger.warning(self._format_message(message, status=status, **kwargs))

    def error(self, message: str, error: Optional[Exception] = None, **kwargs):
        if error:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_msg'] = str(error)
        self.logger.error(self._format_message(message, **kwargs))

    @contextmanager
    def track_request(self, url: str, request_id: Optional[str] = None):
        """
        Log the start and end of the decision request with its duration.

        Yields:
            Dict with request metadata including request_id
        """
        if request_id is None:
            request_id = str(uuid.uuid4())[:8]

        start_time = time.monotonic()
        self.debug("Requesting decision", url=url, request_id=request_id)

        metadata = {
            'request_id': request_id,
            'url': url,
            'start_time': start_time
        }

        try:
            yield metadata
            duration = time.monotonic() - start_time
            self.debug(
                "Decision request completed",
                request_id=request_id,
                duration_ms=int(duration * 1000),
                status=metadata.get('status_code')
            )
        except Exception as e:
            duration = time.monotonic() - start_time
            self.debug(
                "Decision request failed",
                request_id=request_id,
                duration_ms=int(duration * 1000),
                error_type=type(e).__name__
            )
            raise
