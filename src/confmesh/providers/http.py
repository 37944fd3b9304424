"""HTTP configuration provider."""

from typing import Optional

import httpx

from .base import ConfigProvider
from ..interfaces import ConfigSection


class HttpConfigProvider(ConfigProvider):
    """Fetches a JSON object from a remote endpoint."""

    def __init__(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        timeout_seconds: float = 10.0,
        name: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(name or f"http:{url}")
        self.url = url
        self.headers = dict(headers or {})
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def initialize(self) -> None:
        """Create the async HTTP client."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_seconds),
            headers={"Accept": "application/json", **self.headers},
            transport=self._transport,
        )
        self._initialized = True

    async def shutdown(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
        self._initialized = False

    async def load(self) -> ConfigSection:
        """Fetch the section.

        Raises:
            RuntimeError: If the provider was not initialized
            httpx.HTTPStatusError: On a non-2xx response
            ValueError: If the body is not a JSON object
        """
        if not self._client:
            raise RuntimeError("Provider not initialized")

        response = await self._client.get(self.url)
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(
                f"Expected a JSON object from {self.url}, got: {type(data).__name__}"
            )
        return data
