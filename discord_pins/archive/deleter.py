"""Unpin messages, retrying once on a rate limit.

A pin goes through at most two DELETE calls:

    attempt --ok--> DELETED
       |--429--> sleep retry_after --> retry --ok--> DELETED_AFTER_RETRY
       |                                 `--any error--> FAILED
       `--other error--> FAILED

Failures are logged and returned, never raised, so one bad pin does not stop
the rest of the run.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Iterable

import httpx

from discord_pins.archive.client import (
    DiscordAPIError,
    DiscordClient,
    DiscordRateLimitError,
)
from discord_pins.archive.logger import ArchiveLogger
from discord_pins.archive.models import Pin


class DeleteOutcome(str, Enum):
    DELETED = "deleted"
    DELETED_AFTER_RETRY = "deleted_after_retry"
    FAILED = "failed"

    @property
    def ok(self) -> bool:
        return self is not DeleteOutcome.FAILED


def _describe(error: Exception) -> str:
    if isinstance(error, DiscordAPIError):
        return f"response code: {error.status_code}"
    return f"error: {error}"


class PinDeleter:
    """Deletes pins one at a time."""

    def __init__(self, client: DiscordClient, logger: ArchiveLogger) -> None:
        self.client = client
        self.logger = logger

    async def delete(self, channel_id: str, message_id: str) -> DeleteOutcome:
        """Unpin one message, with a single retry after a 429."""
        self.logger.delete_start(channel_id, message_id)
        try:
            await self.client.delete_pin(channel_id, message_id)
            return DeleteOutcome.DELETED
        except DiscordRateLimitError as e:
            retry_after = e.retry_after
        except (DiscordAPIError, httpx.HTTPError) as e:
            self.logger.delete_failed(message_id, _describe(e), retried=False)
            return DeleteOutcome.FAILED

        self.logger.rate_limit(message_id, retry_after)
        await asyncio.sleep(retry_after)
        self.logger.delete_retry(message_id)
        try:
            await self.client.delete_pin(channel_id, message_id)
        except (DiscordAPIError, httpx.HTTPError) as e:
            self.logger.delete_failed(message_id, _describe(e), retried=True)
            return DeleteOutcome.FAILED
        return DeleteOutcome.DELETED_AFTER_RETRY

    async def delete_all(self, pins: Iterable[Pin]) -> list[DeleteOutcome]:
        """Delete pins in order; each finishes (with any backoff) before the next."""
        outcomes: list[DeleteOutcome] = []
        for pin in pins:
            self.logger.debug(f"deleting pin {pin.id}")
            outcomes.append(await self.delete(pin.channel_id, pin.id))
        return outcomes
