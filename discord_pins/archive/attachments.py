"""Attachment downloads into a tree that mirrors the remote URL.

``https://media.discordapp.net/attachments/1/2/cat.png?ex=..`` is stored at
``<root>/static/media.discordapp.net/attachments/1/2/cat.png``. A file that is
already at that path is never downloaded again; its content is not checked.
"""

from __future__ import annotations

import posixpath
from contextlib import aclosing
from pathlib import Path

import httpx

from discord_pins.archive.client import DiscordClient
from discord_pins.archive.logger import ArchiveLogger


STATIC_DIR = "static"
PARTIAL_SUFFIX = ".part"


class AttachmentArchiver:
    """Downloads attachments one at a time, skipping ones already on disk."""

    def __init__(self, client: DiscordClient, root: Path, logger: ArchiveLogger) -> None:
        self.client = client
        self.root = Path(root) / STATIC_DIR
        self.logger = logger

    def local_path_for(self, url: str) -> Path:
        """Map an attachment URL to its archive path.

        Raises:
            ValueError: If the URL has no host or file name, or its path
                would resolve outside the static root.
        """
        parsed = httpx.URL(url)
        host = parsed.host
        # raw_path keeps percent-escapes, so "my%20cat.png" stays as-is on disk
        path = parsed.raw_path.decode("ascii").split("?", 1)[0]
        basename = posixpath.basename(path)
        if not host or not basename:
            raise ValueError(f"cannot archive attachment URL {url!r}")

        dirname = posixpath.dirname(path).lstrip("/")
        parts = [p for p in dirname.split("/") if p and p != "."]
        if ".." in parts or basename in (".", ".."):
            raise ValueError(f"attachment URL escapes archive root: {url!r}")

        return self.root.joinpath(host, *parts, basename)

    async def archive(self, url: str) -> bool:
        """Download ``url`` unless it is already archived.

        Returns:
            True if the file was downloaded, False if it was skipped.
        """
        self.logger.attachment_start(url)
        path = self.local_path_for(url)

        if path.exists():
            self.logger.attachment_exists(path)
            return False

        self.logger.debug(f"creating directory for attachment {path.parent}")
        path.parent.mkdir(parents=True, exist_ok=True)

        # Stream into a side file so an interrupted download never looks
        # like a finished one on the next run.
        partial = path.with_name(path.name + PARTIAL_SUFFIX)
        self.logger.attachment_saving(path)
        try:
            with open(partial, "wb") as f:
                async with aclosing(self.client.iter_attachment(url)) as chunks:
                    async for chunk in chunks:
                        f.write(chunk)
            partial.replace(path)
        except BaseException:
            partial.unlink(missing_ok=True)
            raise
        return True
