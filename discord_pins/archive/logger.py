"""Rich-based logging for the pin archive pipeline.

One ArchiveLogger is built by the CLI (verbose or not) and passed to every
component, so each of them logs with the same filtering.
"""

from __future__ import annotations

from pathlib import Path

from discord_pins.utils.pipeline_logger import BasePipelineLogger


class ArchiveLogger(BasePipelineLogger):
    """Logger for pin archive operations with rich output."""

    def __init__(self, verbose: bool = False) -> None:
        super().__init__(__name__, verbose=verbose)

    # -------------------------------------------------------------------------
    # Fetch & Snapshot
    # -------------------------------------------------------------------------

    def fetch_start(self, channel_id: str) -> None:
        self.debug(f"getting pins for channel id {channel_id}")

    def pins_found(self, count: int, channel_id: str) -> None:
        self._logger.info(f"found {count} pins in channel {channel_id}")

    def snapshot_writing(self, path: Path) -> None:
        self.debug(f"writing pins file to {path}")

    def snapshot_saved(self, path: Path) -> None:
        self._logger.info(f"saved pins to {path}")

    # -------------------------------------------------------------------------
    # Attachments
    # -------------------------------------------------------------------------

    def attachment_start(self, url: str) -> None:
        self.debug(f"downloading attachment {url}")

    def attachment_exists(self, path: Path) -> None:
        self.debug(f"attachment already exists, skipping {path}")

    def attachment_saving(self, path: Path) -> None:
        self.debug(f"saving attachment at {path}")

    def attachments_saved(self, downloaded: int, skipped: int) -> None:
        msg = f"saved {downloaded} attachments"
        if skipped:
            msg += f" ({skipped} already archived)"
        self._logger.info(msg)

    # -------------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------------

    def delete_start(self, channel_id: str, message_id: str) -> None:
        self.debug(
            f"deleting pin in channel {channel_id} with message id {message_id}"
        )

    def rate_limit(self, message_id: str, retry_after: float) -> None:
        """Log a rate limit with the wait before the single retry."""
        self.debug(
            f"rate limited deleting pin {message_id}, "
            f"attempting in {retry_after * 1000:.0f}ms"
        )

    def delete_retry(self, message_id: str) -> None:
        self.debug(f"attempting to delete pin again {message_id}")

    def delete_failed(self, message_id: str, reason: str, retried: bool) -> None:
        again = " again" if retried else ""
        self._logger.error(f"failed to delete pin {message_id}{again}, {reason}")

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def summary(
        self,
        pins: int = 0,
        downloaded: int = 0,
        skipped: int = 0,
        deleted: int | None = None,
        delete_failures: int = 0,
        snapshot: Path | None = None,
        elapsed: float = 0.0,
    ) -> None:
        """Print final archive summary."""
        stats: dict[str, int | str] = {
            "Pins found": pins,
            "Attachments downloaded": downloaded,
            "Attachments skipped": skipped,
        }
        if deleted is not None:
            stats["Pins deleted"] = deleted
            stats["Delete failures"] = delete_failures
        if snapshot is not None:
            stats["Snapshot"] = snapshot.name
        self.print_summary("Pin Archive", elapsed=elapsed, stats=stats, style="cyan")
