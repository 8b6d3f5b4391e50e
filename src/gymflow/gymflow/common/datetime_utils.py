from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.constants import CSV_DATETIME_FORMAT


def now_local() -> datetime:
    """Current local time, truncated to whole seconds.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now().replace(microsecond=0)


def format_timestamp(value: Optional[datetime]) -> str:
    """None formats as an empty field, which the CSV decoders read back as now_local()."""
    return value.strftime(CSV_DATETIME_FORMAT) if value else ""


def parse_timestamp(value: str) -> datetime:
    """Parse 'YYYY-MM-DD HH:MM:SS'. Raises ValueError on mismatch."""
    return datetime.strptime(value.strip(), CSV_DATETIME_FORMAT)
