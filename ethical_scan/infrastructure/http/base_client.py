"""
Base aiohttp client.

Session lifecycle and JSON decoding shared by the lookup adapters.
One ClientSession per client, opened with ``async with``.
"""

from typing import Any, Optional

import aiohttp

from ethical_scan.domain.shared.errors import ExternalServiceError

USER_AGENT = "EthicalScan/1.0"


class JsonApiClient:
    """Async JSON API client base."""

    SERVICE_NAME = "API"

    def __init__(self, timeout_seconds: float = 10) -> None:
        """Initialize API client.

        Args:
            timeout_seconds: Request timeout
        """
        self.timeout_seconds = timeout_seconds
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> Any:
        """Async context manager entry."""
        self._session = aiohttp.ClientSession(headers={"User-Agent": USER_AGENT})
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        if self._session:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Open session, or ExternalServiceError if used outside ``async with``."""
        if not self._session:
            msg = "Client not initialized, use async with"
            raise ExternalServiceError(msg)
        return self._session

    @property
    def timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self.timeout_seconds)

    async def read_json(self, response: aiohttp.ClientResponse) -> dict[str, Any]:
        """Decode a JSON object body regardless of Content-Type.

        Raises:
            ExternalServiceError: If the body is not a JSON object
        """
        try:
            data = await response.json(content_type=None)
        except ValueError as e:
            msg = f"{self.SERVICE_NAME} returned invalid JSON"
            raise ExternalServiceError(msg) from e

        if not isinstance(data, dict):
            msg = f"{self.SERVICE_NAME} returned unexpected payload"
            raise ExternalServiceError(msg)

        return data
