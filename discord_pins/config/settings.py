"""Configuration management using pydantic-settings.

Settings come from, in increasing priority:
- field defaults
- DISCORD_* environment variables
- an optional JSON config file
- explicit keyword arguments (the CLI passes its flags this way)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_BASE_URL = "https://discord.com/api/v9"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/104.0.0.0 Safari/537.36"
)


class ArchiveSettings(BaseSettings):
    """Validated settings for the pin archive pipeline."""

    token: str = ""
    user_agent: str = DEFAULT_USER_AGENT
    api_base_url: str = DEFAULT_API_BASE_URL
    output_dir: Path = Field(default_factory=Path.cwd)
    timeout: float = 30.0
    # Zero-based months in snapshot names unless this is set
    calendar_month: bool = False

    model_config = SettingsConfigDict(
        env_prefix="DISCORD_",
        extra="ignore",
    )

    @field_validator("user_agent", mode="before")
    @classmethod
    def default_blank_user_agent(cls, v: Any) -> Any:
        """Treat an empty user agent as unset."""
        if v is None or v == "":
            return DEFAULT_USER_AGENT
        return v

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @classmethod
    def from_json(
        cls, path: str | Path | None = None, **overrides: Any
    ) -> "ArchiveSettings":
        """Load settings from a JSON config file.

        A missing path or file yields defaults. Keyword overrides whose value
        is None are ignored so unset CLI flags don't mask file or env values.

        Args:
            path: Path to the JSON config file
            **overrides: Values that take precedence over the file

        Returns:
            ArchiveSettings instance with validated configuration
        """
        data: dict[str, Any] = {}
        if path is not None:
            config_path = Path(path)
            if config_path.exists():
                with open(config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)
