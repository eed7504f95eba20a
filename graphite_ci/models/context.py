"""Run context sent to the decision service."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config.constants import CONTEXT_KIND


class Repository(BaseModel):
    """Repository identity."""
    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class RunInfo(BaseModel):
    """Workflow, job and run identifier of the current run."""
    model_config = ConfigDict(frozen=True)

    workflow: str
    job: str
    run: Optional[int] = Field(None, description="GITHUB_RUN_ID; None when unset")


class RunContext(BaseModel):
    """
    Metadata describing the current CI run.

    Built once per invocation from the host environment and never mutated.
    ``event_name`` drives local policy decisions and is not serialized.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["GITHUB_ACTIONS"] = CONTEXT_KIND
    repository: Repository
    pr: Optional[int] = None
    sha: str
    ref: str
    head_ref: Optional[str] = None
    run: RunInfo
    event_name: str = Field(default="", exclude=True)

    def describe(self) -> str:
        """Short reference used in diagnostics, e.g. ``owner/repo#12``."""
        if self.pr is not None:
            return f"{self.repository.full_name}#{self.pr}"
        return f"{self.repository.full_name}@{self.ref or self.sha}"
