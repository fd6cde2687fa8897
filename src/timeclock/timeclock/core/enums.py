from __future__ import annotations

from enum import Enum


class Punctuality(str, Enum):
    """Arrival classification stored with each attendance record."""

    EARLY = "early"
    ON_TIME = "on-time"
    LATE = "late"
    UNKNOWN = "unknown"
