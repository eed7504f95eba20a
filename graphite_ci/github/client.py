"""
GitHub REST client for workflow-run cancellation.

The requester only depends on the ``RunCanceller`` protocol, so tests can pass
any object with an async ``cancel_workflow_run``.
"""

import logging
from typing import Optional, Protocol

import httpx

from ..config.constants import DEFAULT_GITHUB_API_URL, GITHUB_ACCEPT, GITHUB_API_VERSION
from ..errors import CancellationError, InputError

logger = logging.getLogger(__name__)


class RunCanceller(Protocol):
    """Capability to cancel a workflow run."""

    async def cancel_workflow_run(self, owner: str, repo: str, run_id: Optional[int]) -> None:
        ...


class GitHubClient:
    """Minimal GitHub Actions API client."""

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_GITHUB_API_URL,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            token: Token with ``actions: write`` on the repository
            api_url: GitHub REST base URL (``GITHUB_API_URL`` on the runner)
            http_client: Client to send requests with; cancel calls carry no timeout
        """
        self.api_url = api_url.rstrip("/")
        self._token = token
        self._client = http_client or httpx.AsyncClient(timeout=None)
        self._owns_client = http_client is None

    @property
    def headers(self):
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": GITHUB_ACCEPT,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

    async def cancel_workflow_run(self, owner: str, repo: str, run_id: Optional[int]) -> None:
        """
        Cancel a workflow run.

        A 409 means the run already finished and is treated as a no-op.

        Raises:
            InputError: If no run id is available
            CancellationError: If GitHub rejects the request
        """
        if run_id is None:
            raise InputError("GITHUB_RUN_ID is not set; cannot cancel the workflow run")

        url = f"{self.api_url}/repos/{owner}/{repo}/actions/runs/{run_id}/cancel"
        try:
            resp = await self._client.post(url, headers=self.headers)
        except httpx.HTTPError as e:
            raise CancellationError(f"Failed to cancel workflow run {run_id}: {e}") from e

        if resp.status_code == 409:
            logger.info(f"Workflow run {run_id} is no longer running; nothing to cancel")
            return
        if resp.status_code >= 400:
            raise CancellationError(
                f"Failed to cancel workflow run {run_id}: HTTP {resp.status_code} {resp.text}",
                status_code=resp.status_code
            )
        logger.info(f"Requested cancellation of workflow run {run_id}")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
