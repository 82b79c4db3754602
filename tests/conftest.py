"""Shared fixtures for discord-pins tests."""

from __future__ import annotations

from io import StringIO
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from discord_pins.archive.logger import ArchiveLogger


ATTACHMENT_URL = (
    "https://media.discordapp.net/attachments/111/222/cat.png?ex=abc&is=def"
)


@pytest.fixture
def sample_pins() -> list[dict]:
    """Raw pin list as returned by GET /channels/123/pins."""
    return [
        {
            "id": "1001",
            "channel_id": "123",
            "content": "look at this",
            "author": {"id": "42", "username": "someone"},
            "attachments": [
                {
                    "id": "5001",
                    "filename": "cat.png",
                    "size": 3,
                    "url": "https://cdn.discordapp.com/attachments/111/222/cat.png",
                    "proxy_url": ATTACHMENT_URL,
                    "content_type": "image/png",
                }
            ],
        },
        {
            "id": "1002",
            "channel_id": "123",
            "content": "no files here",
            "author": {"id": "43", "username": "someone-else"},
            "attachments": [],
        },
    ]


@pytest.fixture
def quiet_logger() -> ArchiveLogger:
    """An ArchiveLogger whose rich output goes to a string buffer."""
    logger = ArchiveLogger(verbose=True)
    logger.console = Console(
        file=StringIO(), force_terminal=True, width=120, highlight=False
    )
    return logger


@pytest.fixture
def mock_logger() -> MagicMock:
    """A logger double for asserting which log calls were made."""
    return MagicMock(spec=ArchiveLogger)
