"""Fetch a channel's pins and archive them.

Fetching is not retried: an API error here ends the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from discord_pins.archive.attachments import AttachmentArchiver
from discord_pins.archive.client import DiscordClient
from discord_pins.archive.logger import ArchiveLogger
from discord_pins.archive.models import Pin, parse_pins
from discord_pins.archive.snapshot import SnapshotWriter


@dataclass
class PinArchiveResult:
    """Result of fetching and archiving one channel's pins."""

    raw: list[dict[str, Any]] = field(default_factory=list)
    pins: list[Pin] = field(default_factory=list)
    snapshot_path: Path | None = None
    attachments_downloaded: int = 0
    attachments_skipped: int = 0


class PinFetcher:
    """Fetches pins, downloads their attachments, then writes the snapshot."""

    def __init__(
        self,
        client: DiscordClient,
        archiver: AttachmentArchiver,
        snapshot_writer: SnapshotWriter,
        logger: ArchiveLogger,
    ) -> None:
        self.client = client
        self.archiver = archiver
        self.snapshot_writer = snapshot_writer
        self.logger = logger

    async def fetch(self, channel_id: str) -> PinArchiveResult:
        """Fetch and archive every pin in ``channel_id``.

        Args:
            channel_id: Channel to archive

        Returns:
            PinArchiveResult with the raw list, parsed pins and counts
        """
        self.logger.fetch_start(channel_id)
        raw = await self.client.get_pins(channel_id)
        self.logger.pins_found(len(raw), channel_id)

        result = PinArchiveResult(raw=raw, pins=parse_pins(raw))
        await self._archive_attachments(result)
        result.snapshot_path = self.snapshot_writer.write(raw, channel_id)
        return result

    async def _archive_attachments(self, result: PinArchiveResult) -> None:
        """Download attachments in pin order, then attachment order."""
        for pin in result.pins:
            for attachment in pin.attachments:
                if await self.archiver.archive(attachment.proxy_url):
                    result.attachments_downloaded += 1
                else:
                    result.attachments_skipped += 1

        self.logger.attachments_saved(
            result.attachments_downloaded, result.attachments_skipped
        )
