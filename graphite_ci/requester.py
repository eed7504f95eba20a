"""
Decision Requester.

Sends exactly one decision request for the current run and applies the
configured policy to the response:

- ``gate`` cancels the workflow run itself when the service says to skip.
- ``optimizer`` only reports a ``skip`` output for downstream steps.

Every decision-service failure resolves to the conservative default (do not
skip, do not cancel) plus a log line. Errors from the cancel call propagate.
"""

from typing import Optional

from .api.client import DecisionClient
from .config.constants import INVALID_TOKEN_MESSAGE, MANUAL_EVENTS, SKIPPING_CHECKS
from .errors import (
    DecisionTransportError,
    ErrorCategory,
    InputError,
    MalformedResponseError,
)
from .github.client import RunCanceller
from .github.core import ActionsCore
from .models.context import RunContext
from .models.decision import (
    Caller,
    DecisionOutcome,
    DecisionPolicy,
    DecisionRequest,
    DecisionResponse,
    SkipDecision,
)
from .observability.logging import DecisionLogger


class DecisionRequester:
    """Consults the decision service and applies one policy."""

    def __init__(
        self,
        policy: DecisionPolicy,
        client: DecisionClient,
        core: ActionsCore,
        canceller: Optional[RunCanceller] = None,
        cancel_on_any_response: bool = False
    ):
        """
        Args:
            policy: What to do with the decision
            client: Decision service client
            core: Step I/O (outputs and failure state)
            canceller: Required for the gate policy
            cancel_on_any_response: Gate only; also cancel once right after
                any non-401 response, before the body is checked
        """
        if policy is DecisionPolicy.GATE and canceller is None:
            raise InputError("The gate policy requires a run canceller")
        self.policy = policy
        self.client = client
        self.core = core
        self.canceller = canceller
        self.cancel_on_any_response = cancel_on_any_response

    async def run(self, token: str, caller: Caller, context: RunContext) -> DecisionOutcome:
        """Request a decision for ``context`` and act on it."""
        log = DecisionLogger(self.policy.value, context)
        outcome = DecisionOutcome(policy=self.policy)
        request = DecisionRequest(token=token, caller=caller, context=context)

        try:
            with log.track_request(f"{self.client.endpoint}{self.policy.path}") as meta:
                response = await self.client.request_decision(self.policy.path, request)
                meta['status_code'] = response.status_code
        except DecisionTransportError as e:
            log.warning(
                f"Could not reach the decision service for {context.describe()}: {e}. {SKIPPING_CHECKS}"
            )
            return self._conservative(outcome, ErrorCategory.TRANSPORT)

        outcome.status_code = response.status_code

        if self.policy is DecisionPolicy.GATE:
            return await self._apply_gate(response, context, outcome, log)
        return self._apply_optimizer(response, context, outcome, log)

    async def _apply_gate(
        self,
        response: DecisionResponse,
        context: RunContext,
        outcome: DecisionOutcome,
        log: DecisionLogger
    ) -> DecisionOutcome:
        if response.status_code == 401:
            self.core.set_failed(INVALID_TOKEN_MESSAGE)
            outcome.failed = True
            outcome.fallback = ErrorCategory.CONFIGURATION
            return outcome

        if self.cancel_on_any_response:
            await self._cancel(context, outcome, log)

        if not response.ok:
            log.warning(
                f"Response returned a non-200 status for {context.describe()}. {SKIPPING_CHECKS}",
                status=response.status_code
            )
            return self._conservative(outcome, ErrorCategory.TRANSPORT)

        try:
            body = response.parse_body(SkipDecision)
        except MalformedResponseError as e:
            log.warning(f"Failed to parse response body ({e}). {SKIPPING_CHECKS}", status=response.status_code)
            return self._conservative(outcome, ErrorCategory.MALFORMED_RESPONSE)

        outcome.skip = body.skip
        if body.skip:
            log.info("Decision service reports this run can be skipped; cancelling")
            await self._cancel(context, outcome, log)
        else:
            log.info("Decision service reports this run must proceed")
        return outcome

    def _apply_optimizer(
        self,
        response: DecisionResponse,
        context: RunContext,
        outcome: DecisionOutcome,
        log: DecisionLogger
    ) -> DecisionOutcome:
        if response.status_code == 401:
            log.warning(
                "Invalid authentication. Please update your Graphite CI token. Not skipping.",
                status=401
            )
            return self._conservative(outcome, ErrorCategory.CONFIGURATION)

        if response.status_code == 402:
            log.warning(
                "Your Graphite plan does not support the CI optimizer. Not skipping.",
                status=402
            )
            return self._conservative(outcome, ErrorCategory.ENTITLEMENT)

        if context.event_name in MANUAL_EVENTS:
            log.info(f"Run was triggered manually ({context.event_name}); not skipping")
            return self._conservative(outcome, None)

        if not response.ok:
            log.warning(
                f"Response returned a non-200 status for {context.describe()}. Not skipping.",
                status=response.status_code
            )
            return self._conservative(outcome, ErrorCategory.TRANSPORT)

        try:
            body = response.parse_body()
        except MalformedResponseError as e:
            log.warning(f"Failed to parse response body ({e}). Not skipping.", status=response.status_code)
            return self._conservative(outcome, ErrorCategory.MALFORMED_RESPONSE)

        outcome.skip = body.skip
        outcome.reason = body.reason
        if body.reason:
            log.info(f"Decision: skip={str(body.skip).lower()} ({body.reason})")
        else:
            log.info(f"Decision: skip={str(body.skip).lower()}")
        self.core.set_output("skip", body.skip)
        return outcome

    def _conservative(
        self,
        outcome: DecisionOutcome,
        category: Optional[ErrorCategory]
    ) -> DecisionOutcome:
        outcome.skip = False
        outcome.fallback = category
        if self.policy is DecisionPolicy.OPTIMIZER:
            self.core.set_output("skip", False)
        return outcome

    async def _cancel(self, context: RunContext, outcome: DecisionOutcome, log: DecisionLogger) -> None:
        log.debug("Cancelling workflow run", run_id=context.run.run)
        await self.canceller.cancel_workflow_run(
            context.repository.owner,
            context.repository.name,
            context.run.run
        )
        outcome.cancellations += 1
