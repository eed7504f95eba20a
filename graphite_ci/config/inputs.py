"""
Action input parsing.

GitHub Actions exposes each `with:` input to the step as an ``INPUT_<NAME>``
environment variable. This module reads those variables, applies command-line
overrides and validates the result into an ``ActionInputs`` model.
"""

import re
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..errors import InputError
from ..models.decision import DecisionPolicy
from .constants import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT_SECONDS

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

_TRUE_VALUES = {"true", "True", "TRUE"}
_FALSE_VALUES = {"false", "False", "FALSE", ""}


def get_input(env: Mapping[str, str], name: str) -> str:
    """Read an action input the way the Actions runner exposes it."""
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return env.get(key, "").strip()


def parse_timeout(value: str) -> int:
    """
    Parse a timeout in whole seconds.

    Mirrors ``parseInt(value, 10)``: the leading integer is taken and any
    trailing characters are ignored, so ``"10s"`` is 10 and ``"1.9"`` is 1.

    Raises:
        InputError: If no integer can be read or it is below one second
    """
    match = _LEADING_INT.match(value)
    if match is None:
        raise InputError(f"Invalid timeout {value!r}: expected a whole number of seconds")
    seconds = int(match.group(1))
    if seconds < 1:
        raise InputError(f"Invalid timeout {value!r}: must be at least 1 second")
    return seconds


def parse_boolean(name: str, value: str) -> bool:
    """Parse a YAML 1.2 core-schema boolean input."""
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InputError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


class ActionInputs(BaseModel):
    """Validated inputs for one invocation."""

    graphite_token: str = Field(..., description="Bearer credential for the decision service")
    github_token: Optional[str] = Field(None, description="Token authorizing run cancellation")
    endpoint: str = Field(default=DEFAULT_ENDPOINT, description="Decision service base URL")
    timeout: int = Field(default=DEFAULT_TIMEOUT_SECONDS, ge=1, description="Request timeout in seconds")
    policy: DecisionPolicy = Field(default=DecisionPolicy.GATE, description="Post-decision policy")
    cancel_on_any_response: bool = Field(
        default=False,
        description="Gate only: cancel once after any non-401 response, before checking skip"
    )

    @field_validator("graphite_token")
    def validate_graphite_token(cls, v):
        if not v:
            raise ValueError("Input required and not supplied: graphite_token")
        return v

    @field_validator("endpoint")
    def validate_endpoint(cls, v):
        return (v or DEFAULT_ENDPOINT).rstrip("/")

    @field_validator("github_token")
    def validate_github_token(cls, v):
        return v or None

    @model_validator(mode="after")
    def check_policy_requirements(self):
        if self.policy is DecisionPolicy.GATE and not self.github_token:
            raise ValueError("Input required and not supplied: github_token")
        return self

    @property
    def url(self) -> str:
        return f"{self.endpoint}{self.policy.path}"

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str],
        overrides: Optional[Dict[str, Any]] = None
    ) -> "ActionInputs":
        """
        Build inputs from ``INPUT_*`` variables.

        Args:
            env: Environment mapping (usually ``os.environ``)
            overrides: Values that take precedence over the environment,
                e.g. from command-line flags; ``None`` values are ignored

        Raises:
            InputError: For missing or malformed inputs
        """
        raw_timeout = get_input(env, "timeout")
        raw_policy = get_input(env, "policy")
        values: Dict[str, Any] = {
            "graphite_token": get_input(env, "graphite_token"),
            "github_token": get_input(env, "github_token"),
            "endpoint": get_input(env, "endpoint"),
            "cancel_on_any_response": parse_boolean(
                "cancel_on_any_response", get_input(env, "cancel_on_any_response")
            ),
        }
        if raw_timeout:
            values["timeout"] = parse_timeout(raw_timeout)
        if raw_policy:
            values["policy"] = raw_policy.lower()

        for key, value in (overrides or {}).items():
            if value is None:
                continue
            if key == "timeout" and isinstance(value, str):
                value = parse_timeout(value)
            values[key] = value

        try:
            return cls(**values)
        except ValidationError as e:
            raise InputError(_first_error_message(e)) from e


def _first_error_message(error: ValidationError) -> str:
    first = error.errors()[0]
    message = first.get("msg", str(error))
    # pydantic prefixes messages raised from validators
    return message.removeprefix("Value error, ")
