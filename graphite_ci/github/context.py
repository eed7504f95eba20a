"""
Run context loading.

Everything is read through an environment mapping and an event reader so the
loader can be driven by fixed values in tests.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from ..errors import InputError
from ..models.context import Repository, RunContext, RunInfo

logger = logging.getLogger(__name__)

EventReader = Callable[[str], Dict[str, Any]]


def read_event_file(path: str) -> Dict[str, Any]:
    """Read the webhook payload that triggered the run."""
    if not path:
        return {}
    event_path = Path(path)
    if not event_path.exists():
        logger.debug(f"GITHUB_EVENT_PATH {path} does not exist")
        return {}
    try:
        payload = json.loads(event_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to read event payload at {path}: {e}")
        return {}
    return payload if isinstance(payload, dict) else {}


def _parse_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value) if value else None
    except ValueError:
        return None


def _repository(env: Mapping[str, str], payload: Dict[str, Any]) -> Repository:
    full_name = env.get("GITHUB_REPOSITORY", "")
    if full_name:
        owner, _, name = full_name.partition("/")
        if owner and name:
            return Repository(owner=owner, name=name)

    repo = payload.get("repository") or {}
    owner = (repo.get("owner") or {}).get("login")
    name = repo.get("name")
    if owner and name:
        return Repository(owner=owner, name=name)

    raise InputError(
        "context.repo requires a GITHUB_REPOSITORY environment variable like 'owner/repo'"
    )


def _pull_request_number(payload: Dict[str, Any]) -> Optional[int]:
    pull_request = payload.get("pull_request")
    if not isinstance(pull_request, dict):
        return None
    number = pull_request.get("number")
    return number if isinstance(number, int) else None


def load_run_context(
    env: Mapping[str, str],
    read_event: EventReader = read_event_file
) -> RunContext:
    """
    Build the run context from GitHub Actions environment variables.

    Args:
        env: Environment mapping (usually ``os.environ``)
        read_event: Loads the event payload named by ``GITHUB_EVENT_PATH``

    Returns:
        RunContext for the current run

    Raises:
        InputError: If the repository cannot be determined
    """
    payload = read_event(env.get("GITHUB_EVENT_PATH", ""))

    return RunContext(
        repository=_repository(env, payload),
        pr=_pull_request_number(payload),
        sha=env.get("GITHUB_SHA", ""),
        ref=env.get("GITHUB_REF", ""),
        head_ref=env.get("GITHUB_HEAD_REF") or None,
        run=RunInfo(
            workflow=env.get("GITHUB_WORKFLOW", ""),
            job=env.get("GITHUB_JOB", ""),
            run=_parse_int(env.get("GITHUB_RUN_ID")),
        ),
        event_name=env.get("GITHUB_EVENT_NAME", ""),
    )
