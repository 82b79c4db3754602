"""JSON snapshots of a channel's pin list."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from discord_pins.archive.logger import ArchiveLogger
from discord_pins.utils.time import archive_timestamp, localnow


SNAPSHOT_DIR = "json"


class SnapshotWriter:
    """Writes the raw pin list to ``<root>/json/pins-<channel>-<timestamp>.json``.

    Every call produces a new file. When two runs land in the same second the
    later one gets a ``-1``, ``-2``, ... suffix rather than overwriting.
    """

    def __init__(
        self,
        root: Path,
        logger: ArchiveLogger,
        calendar_month: bool = False,
    ) -> None:
        self.directory = Path(root) / SNAPSHOT_DIR
        self.logger = logger
        self.calendar_month = calendar_month

    def path_for(self, channel_id: str, when: datetime) -> Path:
        stem = f"pins-{channel_id}-{archive_timestamp(when, self.calendar_month)}"
        path = self.directory / f"{stem}.json"
        n = 0
        while path.exists():
            n += 1
            path = self.directory / f"{stem}-{n}.json"
        return path

    def write(
        self,
        data: list[dict[str, Any]],
        channel_id: str,
        when: datetime | None = None,
    ) -> Path:
        """Serialize ``data`` verbatim and return the written path."""
        self.logger.debug(f"creating directory for pins archive {self.directory}")
        self.directory.mkdir(parents=True, exist_ok=True)

        path = self.path_for(channel_id, when or localnow())
        self.logger.snapshot_writing(path)
        # "x" mode: a file that appeared since path_for() is an error, not a clobber
        with open(path, "x", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)

        self.logger.snapshot_saved(path)
        return path
