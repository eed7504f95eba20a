"""Decision request, response and outcome models."""

import json
from enum import Enum
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError

from ..config.constants import GATE_PATH, OPTIMIZER_PATH
from ..errors import ErrorCategory, MalformedResponseError
from .context import RunContext


class DecisionPolicy(str, Enum):
    """What to do with the decision once it is known."""
    GATE = "gate"            # cancel the workflow run directly
    OPTIMIZER = "optimizer"  # report a `skip` output only

    @property
    def path(self) -> str:
        return GATE_PATH if self is DecisionPolicy.GATE else OPTIMIZER_PATH


class Caller(BaseModel):
    """Identity of the client calling the decision service."""
    model_config = ConfigDict(frozen=True)

    name: str
    version: str


class DecisionRequest(BaseModel):
    """Request body for the decision endpoint."""
    model_config = ConfigDict(frozen=True)

    token: str
    caller: Caller
    context: RunContext

    def to_payload(self) -> Dict[str, Any]:
        # Absent pr/head_ref are omitted rather than sent as null
        return self.model_dump(mode="json", exclude_none=True)


class SkipDecision(BaseModel):
    """Parsed 200 response as the gate reads it: only ``skip`` matters."""
    skip: StrictBool


class DecisionBody(SkipDecision):
    """Parsed 200 response: ``{skip: boolean, reason?: string}``."""
    reason: Optional[str] = None


class DecisionResponse(BaseModel):
    """Status code and raw body of the decision endpoint response."""
    status_code: int
    text: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    def parse_body(self, model: Type[SkipDecision] = DecisionBody) -> SkipDecision:
        """
        Parse the body as a decision.

        Args:
            model: Shape to validate against; fields it does not declare are ignored

        Raises:
            MalformedResponseError: If the body is not JSON or lacks ``skip``
        """
        try:
            data = json.loads(self.text)
        except (ValueError, RecursionError) as e:
            raise MalformedResponseError(
                f"Response body is not valid JSON: {type(e).__name__}: {e}",
                status_code=self.status_code,
                original_error=e
            ) from e
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Response body is not a decision: {e.error_count()} validation error(s)",
                status_code=self.status_code,
                original_error=e
            ) from e


class DecisionOutcome(BaseModel):
    """How one invocation resolved."""
    policy: DecisionPolicy
    skip: bool = False
    reason: Optional[str] = None
    status_code: Optional[int] = None
    fallback: Optional[ErrorCategory] = Field(
        None,
        description="Why the conservative default was taken, if it was"
    )
    cancellations: int = Field(default=0, ge=0, description="Cancel calls issued")
    failed: bool = False
