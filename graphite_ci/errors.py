"""
Error taxonomy for the Graphite CI action.

Decision-service failures are absorbed by the requester and resolved to the
conservative "do not skip" default. Input and cancellation errors propagate
to the top-level entry point, which fails the invocation.
"""

from enum import Enum
from typing import Optional


class ErrorCategory(Enum):
    """Categories used when an invocation falls back to the safe default."""
    CONFIGURATION = "configuration"
    ENTITLEMENT = "entitlement"
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"
    UNKNOWN = "unknown"


class GraphiteCIError(Exception):
    """Base exception for all action errors."""

    category = ErrorCategory.UNKNOWN

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(GraphiteCIError):
    """An action input is missing or cannot be parsed."""

    category = ErrorCategory.CONFIGURATION


class DecisionServiceError(GraphiteCIError):
    """
    Base exception for decision-service failures.

    Attributes:
        message: Error message
        status_code: HTTP status code if a response was received
        original_error: The transport exception if wrapped
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        original_error: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.original_error = original_error


class DecisionTransportError(DecisionServiceError):
    """Timeout, DNS or connection failure talking to the decision service."""

    category = ErrorCategory.TRANSPORT


class MalformedResponseError(DecisionServiceError):
    """The response body is not a valid decision."""

    category = ErrorCategory.MALFORMED_RESPONSE


class CancellationError(GraphiteCIError):
    """The GitHub API refused to cancel the workflow run."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
