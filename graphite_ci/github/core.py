"""
Workflow-step I/O: outputs and the step's failure state.

Failures are logged through ``logging`` so the workflow-command formatter
turns them into annotations; outputs are appended to ``$GITHUB_OUTPUT``.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)


def _to_command_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


class ActionsCore:
    """State of the current workflow step."""

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        env = os.environ if env is None else env
        self.output_path: Optional[str] = env.get("GITHUB_OUTPUT") or None
        self.outputs: Dict[str, str] = {}
        self.failed = False
        self.failure_message: Optional[str] = None

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def set_output(self, name: str, value) -> None:
        """
        Set a step output for downstream steps.

        Written with the heredoc delimiter form so values may span lines.
        """
        text = _to_command_value(value)
        self.outputs[name] = text

        if self.output_path is None:
            logger.info(f"Output {name}={text} (GITHUB_OUTPUT is not set)")
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in name or delimiter in text:
            raise ValueError(f"Unexpected input: name or value contains delimiter {delimiter}")
        with Path(self.output_path).open("a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")

    def set_failed(self, message: str) -> None:
        """Mark the step as failed; the process exits with code 1."""
        self.failed = True
        self.failure_message = message
        logger.error(message)
