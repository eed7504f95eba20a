"""HTTP client for the Graphite decision service."""

import asyncio
from typing import Optional

import httpx

from ..errors import DecisionTransportError
from ..models.decision import DecisionRequest, DecisionResponse


class DecisionClient:
    """Sends one decision request and returns the raw response."""

    def __init__(
        self,
        endpoint: str,
        timeout: float,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            endpoint: Base URL of the decision service
            timeout: Total time allowed for the request, in seconds
            http_client: Client to send requests with (tests pass a mock transport)
        """
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = http_client is None

    async def request_decision(self, path: str, request: DecisionRequest) -> DecisionResponse:
        """
        POST the request to ``<endpoint><path>``.

        The whole exchange is bounded by ``timeout``; on expiry the pending
        request is cancelled.

        Raises:
            DecisionTransportError: On timeout or any transport failure
        """
        url = f"{self.endpoint}{path}"
        try:
            resp = await asyncio.wait_for(
                self._client.post(url, json=request.to_payload()),
                timeout=self.timeout
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise DecisionTransportError(
                f"Decision request timed out after {self.timeout:g}s",
                original_error=e
            ) from e
        except httpx.HTTPError as e:
            raise DecisionTransportError(
                f"Decision request failed: {type(e).__name__}: {e}",
                original_error=e
            ) from e

        return DecisionResponse(status_code=resp.status_code, text=resp.text)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
