"""Discord REST API client for the pins endpoints.

This module provides an async HTTP client with:
- Proper request headers for user tokens
- Typed errors for non-success responses, including 429 with retry_after
- Streaming downloads of attachment URLs

The client never retries by itself. Callers that want to retry (the pin
deleter) catch DiscordRateLimitError and decide what to do.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, AsyncIterator

import httpx

from discord_pins.config.settings import DEFAULT_API_BASE_URL


DEFAULT_RETRY_AFTER = 1.0  # seconds


class DiscordAPIError(Exception):
    """Raised when Discord API returns an error."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Discord API error {status_code}: {message}")


class DiscordRateLimitError(DiscordAPIError):
    """Raised on HTTP 429. retry_after is in seconds."""

    def __init__(self, retry_after: float) -> None:
        self.retry_after = retry_after
        super().__init__(429, f"Rate limited, retry after {retry_after}s")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text


def _seconds(value: Any) -> float | None:
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


def _retry_after(response: httpx.Response) -> float:
    """Read the cooldown from the JSON body, falling back to the header.

    Anything that isn't a number of seconds (an HTTP-date header, a string
    in the body) falls through to DEFAULT_RETRY_AFTER.
    """
    try:
        body = response.json()
    except ValueError:
        body = None
    candidates = [
        body.get("retry_after") if isinstance(body, dict) else None,
        response.headers.get("Retry-After"),
    ]
    for value in candidates:
        seconds = _seconds(value)
        if seconds is not None:
            return seconds
    return DEFAULT_RETRY_AFTER


@dataclass
class DiscordClient:
    """Async Discord REST API client.

    Usage:
        async with DiscordClient(token=..., user_agent=...) as client:
            pins = await client.get_pins("123")
    """

    token: str
    user_agent: str
    base_url: str = DEFAULT_API_BASE_URL
    timeout: float = 30.0
    transport: httpx.AsyncBaseTransport | None = None

    def __post_init__(self) -> None:
        self._client: httpx.AsyncClient | None = None

    @property
    def headers(self) -> dict[str, str]:
        """Build API request headers."""
        return {
            "Authorization": self.token,
            "User-Agent": self.user_agent,
        }

    async def __aenter__(self) -> "DiscordClient":
        # No client-wide headers: attachment downloads go to the CDN and must
        # not carry the token.
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with.")
        return self._client

    async def _request(self, method: str, path: str) -> Any:
        """Make an authenticated API request.

        Returns the decoded JSON body, or None when the body is empty.
        """
        client = self._require_client()
        response = await client.request(
            method, f"{self.base_url}{path}", headers=self.headers
        )

        if response.status_code == 429:
            raise DiscordRateLimitError(_retry_after(response))

        if not 200 <= response.status_code < 300:
            raise DiscordAPIError(response.status_code, _error_message(response))

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # -------------------------------------------------------------------------
    # Pin endpoints
    # -------------------------------------------------------------------------

    async def get_pins(self, channel_id: str) -> list[dict[str, Any]]:
        """Fetch every pinned message in a channel (single page)."""
        return await self._request("GET", f"/channels/{channel_id}/pins")

    async def delete_pin(self, channel_id: str, message_id: str) -> None:
        """Unpin a message."""
        await self._request("DELETE", f"/channels/{channel_id}/pins/{message_id}")

    # -------------------------------------------------------------------------
    # Attachments
    # -------------------------------------------------------------------------

    async def iter_attachment(self, url: str) -> AsyncIterator[bytes]:
        """Stream an attachment's bytes from an absolute URL."""
        client = self._require_client()
        async with client.stream(
            "GET", url, headers={"User-Agent": self.user_agent}
        ) as response:
            if response.status_code != 200:
                await response.aread()
                raise DiscordAPIError(response.status_code, response.text)
            async for chunk in response.aiter_bytes():
                yield chunk
