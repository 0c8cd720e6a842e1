"""OAuth2 client-credentials provider for the FatSecret Platform API."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol

import httpx

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class CredentialProvider(Protocol):
    """Source of bearer tokens for the food catalog."""

    async def get_token(self) -> str | None:
        """Return a valid access token, or None when unavailable."""

    def invalidate(self) -> None:
        """Forget the cached token so the next call fetches a new one."""


@dataclass(frozen=True)
class AccessCredential:
    """Bearer token with the instant it stops being usable."""

    token: str
    expires_at: datetime

    def is_valid(self, now: datetime) -> bool:
        """Return true while the token has not reached its expiry."""
        return now < self.expires_at


@dataclass
class HttpxCredentialProvider(CredentialProvider):
    """Fetches and caches client-credentials tokens with HTTPX."""

    client_id: str
    client_secret: str
    token_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15.0
    expiry_skew_seconds: int = 60
    clock: Callable[[], datetime] = _utcnow
    _credential: AccessCredential | None = field(default=None, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)

    @classmethod
    def create(
        cls,
        client_id: str,
        client_secret: str,
        token_url: str,
        timeout_seconds: float = 15.0,
    ) -> "HttpxCredentialProvider":
        """Create a provider with a managed httpx session."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            token_url=token_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def get_token(self) -> str | None:
        """Return the cached token, refreshing it when absent or expired."""
        cached = self._credential
        if cached is not None and cached.is_valid(self.clock()):
            return cached.token
        async with self._lock:
            cached = self._credential
            if cached is not None and cached.is_valid(self.clock()):
                return cached.token
            self._credential = await self._fetch_credential()
        return self._credential.token if self._credential else None

    def invalidate(self) -> None:
        """Drop the cached token."""
        self._credential = None

    async def _fetch_credential(self) -> AccessCredential | None:
        requested_at = self.clock()
        try:
            response = await self.http_client.post(
                self.token_url,
                data={"grant_type": "client_credentials", "scope": "basic"},
                auth=(self.client_id, self.client_secret),
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
            token = payload["access_token"]
            expires_in = int(payload.get("expires_in", 0))
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            _logger.warning("FatSecret token request failed: %s", exc)
            return None
        lifetime = max(expires_in - self.expiry_skew_seconds, 0)
        return AccessCredential(
            token=str(token),
            expires_at=requested_at + timedelta(seconds=lifetime),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
