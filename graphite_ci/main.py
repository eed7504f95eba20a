"""Top-level entry point: wires inputs, context and clients into one run."""

import logging
import os
from typing import Any, Dict, Mapping, Optional

import httpx

from . import __version__
from .api.client import DecisionClient
from .config.constants import CALLER_NAME, DEFAULT_GITHUB_API_URL
from .config.inputs import ActionInputs
from .github.client import GitHubClient, RunCanceller
from .github.context import EventReader, load_run_context, read_event_file
from .github.core import ActionsCore
from .models.decision import Caller, DecisionOutcome, DecisionPolicy
from .requester import DecisionRequester

logger = logging.getLogger(__name__)


async def run(
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Dict[str, Any]] = None,
    core: Optional[ActionsCore] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    canceller: Optional[RunCanceller] = None,
    read_event: EventReader = read_event_file
) -> Optional[DecisionOutcome]:
    """
    Run the action once.

    Any error that escapes the requester fails the step with its message;
    nothing is raised to the caller.

    Args:
        env: Environment mapping (defaults to ``os.environ``)
        overrides: Input values that take precedence over ``INPUT_*`` variables
        core: Step I/O; inspect ``core.exit_code`` afterwards
        http_client: Client used for the decision request
        canceller: Run canceller; a ``GitHubClient`` is built for the gate policy
        read_event: Event payload reader

    Returns:
        The decision outcome, or None if the step failed before deciding
    """
    env = os.environ if env is None else env
    core = core or ActionsCore(env)

    try:
        return await _request_and_apply(env, overrides, core, http_client, canceller, read_event)
    except Exception as e:
        core.set_failed(str(e) or type(e).__name__)
        return None


async def _request_and_apply(
    env: Mapping[str, str],
    overrides: Optional[Dict[str, Any]],
    core: ActionsCore,
    http_client: Optional[httpx.AsyncClient],
    canceller: Optional[RunCanceller],
    read_event: EventReader
) -> DecisionOutcome:
    inputs = ActionInputs.from_env(env, overrides)
    context = load_run_context(env, read_event)
    logger.debug(f"Loaded run context for {context.describe()} (event={context.event_name})")

    client = DecisionClient(inputs.endpoint, inputs.timeout, http_client=http_client)
    github: Optional[GitHubClient] = None
    if canceller is None and inputs.policy is DecisionPolicy.GATE:
        github = GitHubClient(
            inputs.github_token,
            api_url=env.get("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL
        )
        canceller = github

    requester = DecisionRequester(
        inputs.policy,
        client,
        core,
        canceller=canceller,
        cancel_on_any_response=inputs.cancel_on_any_response
    )
    try:
        return await requester.run(
            inputs.graphite_token,
            Caller(name=CALLER_NAME, version=__version__),
            context
        )
    finally:
        await client.aclose()
        if github is not None:
            await github.aclose()
