"""Tests for discord_pins.utils.time module."""

from __future__ import annotations

from datetime import datetime

from discord_pins.utils.time import archive_timestamp, localnow


class TestLocalnow:
    """Tests for localnow function."""

    def test_returns_timezone_aware_datetime(self) -> None:
        assert localnow().tzinfo is not None


class TestArchiveTimestamp:
    """Tests for archive_timestamp function."""

    def test_zero_pads_every_field(self) -> None:
        result = archive_timestamp(datetime(2024, 2, 3, 4, 5, 6))

        assert result == "2024-01-03-T040506"

    def test_month_is_zero_based_by_default(self) -> None:
        assert archive_timestamp(datetime(2024, 1, 15, 10, 30, 0)).startswith("2024-00-")
        assert archive_timestamp(datetime(2024, 12, 15, 10, 30, 0)).startswith("2024-11-")

    def test_calendar_month(self) -> None:
        result = archive_timestamp(datetime(2024, 12, 31, 23, 59, 59), calendar_month=True)

        assert result == "2024-12-31-T235959"

    def test_fixed_width(self) -> None:
        a = archive_timestamp(datetime(2024, 1, 1, 0, 0, 0))
        b = archive_timestamp(datetime(2024, 11, 30, 23, 59, 59))

        assert len(a) == len(b) == len("YYYY-MM-DD-THHMMSS")
