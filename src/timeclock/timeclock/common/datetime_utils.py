from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ConfigError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def date_key(instant: Optional[datetime] = None) -> str:
    """Calendar date of ``instant`` (local wall clock) as zero-padded YYYY-MM-DD.

    No timezone conversion happens: an aware datetime keeps its own offset.
    """
    instant = instant or now_local()
    return f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d}"


def minutes_of_day(instant: datetime) -> int:
    """Local hour * 60 + minute, in [0, 1439]. Seconds are ignored."""
    return instant.hour * 60 + instant.minute


def parse_clock_time(value: str) -> int:
    """Parse an ``HH:MM`` business-hours string into minutes of day."""
    match = re.fullmatch(r"(\d{1,2}):(\d{1,2})", str(value).strip(), re.ASCII)
    if not match:
        raise ConfigError(f"Invalid clock time {value!r}, expected HH:MM")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ConfigError(f"Clock time out of range: {value!r}")
    return hours * 60 + minutes
