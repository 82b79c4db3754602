"""Main orchestration for the pin archive pipeline.

Archives one channel: pins, attachments and a JSON snapshot, then optionally
unpins every archived message.
"""

from __future__ import annotations

import httpx

from discord_pins.archive.attachments import AttachmentArchiver
from discord_pins.archive.client import DiscordClient
from discord_pins.archive.deleter import DeleteOutcome, PinDeleter
from discord_pins.archive.fetcher import PinArchiveResult, PinFetcher
from discord_pins.archive.logger import ArchiveLogger
from discord_pins.archive.snapshot import SnapshotWriter
from discord_pins.config.settings import ArchiveSettings
from discord_pins.core import BaseOrchestrator


class PinArchiveOrchestrator(BaseOrchestrator):
    """Orchestrates fetch, archive and optional delete for one channel."""

    def __init__(
        self,
        settings: ArchiveSettings,
        logger: ArchiveLogger,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(settings, logger)
        self.logger: ArchiveLogger = logger
        self.transport = transport
        # Stats
        self.result: PinArchiveResult | None = None
        self.delete_outcomes: list[DeleteOutcome] | None = None
        self.pins_deleted: int | None = None
        self.delete_failures = 0

    def _make_client(self) -> DiscordClient:
        return DiscordClient(
            token=self.settings.token,
            user_agent=self.settings.user_agent,
            base_url=self.settings.api_base_url,
            timeout=self.settings.timeout,
            transport=self.transport,
        )

    async def _run_pipeline(self, channel_id: str, delete: bool = False) -> None:
        """Execute the archive pipeline."""
        root = self.settings.output_dir

        with self.logger.block(f"Channel {channel_id}") as block:
            block.field("output", root)
            if delete:
                block.field("delete after archive", "yes", color="red")

            async with self._make_client() as client:
                fetcher = PinFetcher(
                    client=client,
                    archiver=AttachmentArchiver(client, root, self.logger),
                    snapshot_writer=SnapshotWriter(
                        root, self.logger, self.settings.calendar_month
                    ),
                    logger=self.logger,
                )
                self.result = await fetcher.fetch(channel_id)

                # Deletion only starts once the whole archive phase is done
                if delete:
                    deleter = PinDeleter(client, self.logger)
                    self.delete_outcomes = await deleter.delete_all(self.result.pins)
                    self.delete_failures = sum(
                        1 for o in self.delete_outcomes if not o.ok
                    )
                    self.pins_deleted = len(self.delete_outcomes) - self.delete_failures

            block.result(f"archived {len(self.result.pins):,} pins")
            if self.pins_deleted is not None:
                block.result(
                    f"deleted {self.pins_deleted:,} pins",
                    success=self.delete_failures == 0,
                )

    def _log_summary(self, elapsed: float) -> None:
        """Log the final archive summary."""
        result = self.result or PinArchiveResult()
        self.logger.summary(
            pins=len(result.pins),
            downloaded=result.attachments_downloaded,
            skipped=result.attachments_skipped,
            deleted=self.pins_deleted,
            delete_failures=self.delete_failures,
            snapshot=result.snapshot_path,
            elapsed=elapsed,
        )


async def run_archive(
    settings: ArchiveSettings,
    channel_id: str,
    delete: bool = False,
    logger: ArchiveLogger | None = None,
) -> PinArchiveOrchestrator:
    """Entry point for running the pin archive pipeline."""
    orchestrator = PinArchiveOrchestrator(settings, logger or ArchiveLogger())
    await orchestrator.run(channel_id=channel_id, delete=delete)
    return orchestrator
