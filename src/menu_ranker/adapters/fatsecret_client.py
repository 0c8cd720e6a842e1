"""FatSecret Platform API search client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class FatSecretClient(Protocol):
    """Interface for food catalog searches."""

    async def search_foods(
        self, query: str, token: str, max_results: int = 50
    ) -> dict[str, object]:
        """Search foods by keyword and return raw API data."""


@dataclass
class HttpxFatSecretClient(FatSecretClient):
    """HTTPX-backed FatSecret client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15.0

    @classmethod
    def create(
        cls, base_url: str, timeout_seconds: float = 15.0
    ) -> "HttpxFatSecretClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search_foods(
        self, query: str, token: str, max_results: int = 50
    ) -> dict[str, object]:
        """Search foods by keyword."""
        url = f"{self.base_url}/foods/search/v1"
        response = await self.http_client.get(
            url,
            headers={"Authorization": f"Bearer {token}"},
            params={
                "search_expression": query,
                "format": "json",
                "max_results": max_results,
                "page_number": 0,
            },
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
