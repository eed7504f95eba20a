from .context import Repository, RunContext, RunInfo
from .decision import (
    Caller,
    DecisionBody,
    DecisionOutcome,
    DecisionPolicy,
    DecisionRequest,
    DecisionResponse,
    SkipDecision,
)

__all__ = [
    "Caller",
    "DecisionBody",
    "DecisionOutcome",
    "DecisionPolicy",
    "DecisionRequest",
    "DecisionResponse",
    "Repository",
    "RunContext",
    "RunInfo",
    "SkipDecision",
]
