from datetime import datetime


def localnow() -> datetime:
    """Return the current local time as a timezone-aware datetime."""
    return datetime.now().astimezone()


def _pad(value: int) -> str:
    return f"{value:02d}"


def archive_timestamp(when: datetime, calendar_month: bool = False) -> str:
    """
    Format a datetime as ``YYYY-MM-DD-THHMMSS`` for archive file names.

    By default the month is zero-based (January is ``00``), which keeps new
    file names sortable alongside archives written by earlier releases.
    Pass ``calendar_month=True`` for the usual 1-12 numbering.
    """
    month = when.month if calendar_month else when.month - 1
    return (
        f"{when.year}-{_pad(month)}-{_pad(when.day)}"
        f"-T{_pad(when.hour)}{_pad(when.minute)}{_pad(when.second)}"
    )
