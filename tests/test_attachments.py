"""Unit tests for discord_pins.archive.attachments."""

from __future__ import annotations

from pathlib import Path

import pytest

from discord_pins.archive.attachments import (
    PARTIAL_SUFFIX,
    STATIC_DIR,
    AttachmentArchiver,
)
from discord_pins.archive.client import DiscordAPIError


URL = "https://media.discordapp.net/attachments/111/222/cat.png?ex=abc"


class FakeClient:
    """Stands in for DiscordClient.iter_attachment."""

    def __init__(
        self, chunks: list[bytes] | None = None, error: Exception | None = None
    ) -> None:
        self.chunks = chunks if chunks is not None else [b"ab", b"c"]
        self.error = error
        self.calls: list[str] = []

    async def iter_attachment(self, url: str):
        self.calls.append(url)
        for chunk in self.chunks:
            yield chunk
        if self.error:
            raise self.error


# ---------------------------------------------------------------------------
# TestLocalPath
# ---------------------------------------------------------------------------


class TestLocalPath:
    """Tests for AttachmentArchiver.local_path_for."""

    def test_mirrors_host_and_path(self, tmp_path: Path, mock_logger):
        archiver = AttachmentArchiver(FakeClient(), tmp_path, mock_logger)

        path = archiver.local_path_for(URL)

        assert path == (
            tmp_path / STATIC_DIR / "media.discordapp.net"
            / "attachments" / "111" / "222" / "cat.png"
        )

    def test_ignores_query_and_fragment(self, tmp_path: Path, mock_logger):
        archiver = AttachmentArchiver(FakeClient(), tmp_path, mock_logger)

        a = archiver.local_path_for("https://cdn.example/a/b.txt?x=1#frag")
        b = archiver.local_path_for("https://cdn.example/a/b.txt")

        assert a == b

    def test_keeps_percent_encoding(self, tmp_path: Path, mock_logger):
        archiver = AttachmentArchiver(FakeClient(), tmp_path, mock_logger)

        path = archiver.local_path_for(
            "https://media.discordapp.net/attachments/1/my%20dir/my%20cat.png?ex=1"
        )

        assert path == (
            tmp_path / STATIC_DIR / "media.discordapp.net"
            / "attachments" / "1" / "my%20dir" / "my%20cat.png"
        )

    @pytest.mark.asyncio
    async def test_encoded_name_archived_by_earlier_run_is_skipped(
        self, tmp_path: Path, mock_logger
    ):
        existing = (
            tmp_path / STATIC_DIR / "cdn.example" / "a" / "my%20cat.png"
        )
        existing.parent.mkdir(parents=True)
        existing.write_bytes(b"old")
        client = FakeClient()
        archiver = AttachmentArchiver(client, tmp_path, mock_logger)

        downloaded = await archiver.archive("https://cdn.example/a/my%20cat.png")

        assert downloaded is False
        assert client.calls == []

    def test_file_at_host_root(self, tmp_path: Path, mock_logger):
        archiver = AttachmentArchiver(FakeClient(), tmp_path, mock_logger)

        path = archiver.local_path_for("https://cdn.example/file.bin")

        assert path == tmp_path / STATIC_DIR / "cdn.example" / "file.bin"

    def test_rejects_url_without_file_name(self, tmp_path: Path, mock_logger):
        archiver = AttachmentArchiver(FakeClient(), tmp_path, mock_logger)

        with pytest.raises(ValueError):
            archiver.local_path_for("https://cdn.example/attachments/")

    def test_rejects_url_without_host(self, tmp_path: Path, mock_logger):
        archiver = AttachmentArchiver(FakeClient(), tmp_path, mock_logger)

        with pytest.raises(ValueError):
            archiver.local_path_for("/attachments/1/a.png")


# ---------------------------------------------------------------------------
# TestArchive
# ---------------------------------------------------------------------------


class TestArchive:
    """Tests for AttachmentArchiver.archive."""

    @pytest.mark.asyncio
    async def test_downloads_missing_file(self, tmp_path: Path, mock_logger):
        client = FakeClient([b"hello ", b"world"])
        archiver = AttachmentArchiver(client, tmp_path, mock_logger)

        downloaded = await archiver.archive(URL)

        path = archiver.local_path_for(URL)
        assert downloaded is True
        assert path.read_bytes() == b"hello world"
        assert client.calls == [URL]
        assert not path.with_name(path.name + PARTIAL_SUFFIX).exists()

    @pytest.mark.asyncio
    async def test_skips_existing_file(self, tmp_path: Path, mock_logger):
        client = FakeClient()
        archiver = AttachmentArchiver(client, tmp_path, mock_logger)
        path = archiver.local_path_for(URL)
        path.parent.mkdir(parents=True)
        path.write_bytes(b"old")

        downloaded = await archiver.archive(URL)

        assert downloaded is False
        assert client.calls == []
        assert path.read_bytes() == b"old"
        mock_logger.attachment_exists.assert_called_once_with(path)

    @pytest.mark.asyncio
    async def test_second_archive_is_a_skip(self, tmp_path: Path, mock_logger):
        client = FakeClient()
        archiver = AttachmentArchiver(client, tmp_path, mock_logger)

        assert await archiver.archive(URL) is True
        assert await archiver.archive(URL) is False
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_failed_download_leaves_nothing(self, tmp_path: Path, mock_logger):
        client = FakeClient([b"partial"], error=DiscordAPIError(500, "boom"))
        archiver = AttachmentArchiver(client, tmp_path, mock_logger)

        with pytest.raises(DiscordAPIError):
            await archiver.archive(URL)

        path = archiver.local_path_for(URL)
        assert not path.exists()
        assert not path.with_name(path.name + PARTIAL_SUFFIX).exists()

    @pytest.mark.asyncio
    async def test_blocked_directory_is_fatal(self, tmp_path: Path, mock_logger):
        (tmp_path / STATIC_DIR).write_text("not a directory")
        archiver = AttachmentArchiver(FakeClient(), tmp_path, mock_logger)

        with pytest.raises(OSError):
            await archiver.archive(URL)
