"""
Graphite CI - ask the Graphite decision service whether a GitHub Actions run
can be skipped, then cancel the run or report a ``skip`` output.

Two policies are available:
- gate: cancels the workflow run when the service says to skip
- optimizer: sets the ``skip`` step output for downstream steps
"""

__version__ = "1.0.0"

from .errors import (
    CancellationError,
    DecisionServiceError,
    DecisionTransportError,
    ErrorCategory,
    GraphiteCIError,
    InputError,
    MalformedResponseError,
)
from .models import (
    Caller,
    DecisionOutcome,
    DecisionPolicy,
    DecisionRequest,
    DecisionResponse,
    RunContext,
)
from .requester import DecisionRequester
from .main import run

__all__ = [
    # Entry point
    "run",
    "DecisionRequester",

    # Models
    "Caller",
    "DecisionOutcome",
    "DecisionPolicy",
    "DecisionRequest",
    "DecisionResponse",
    "RunContext",

    # Errors
    "CancellationError",
    "DecisionServiceError",
    "DecisionTransportError",
    "ErrorCategory",
    "GraphiteCIError",
    "InputError",
    "MalformedResponseError",
]
