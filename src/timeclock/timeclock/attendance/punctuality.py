from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import minutes_of_day, parse_clock_time
from ..core.constants import DEFAULT_BUSINESS_START, DEFAULT_GRACE_MINUTES
from ..core.enums import Punctuality
from ..core.exceptions import ConfigError


@dataclass(frozen=True)
class PunctualityPolicy:
    """Business start (minutes of day) plus the grace window that still counts as on-time."""

    start_minutes: int
    grace_minutes: int

    @classmethod
    def from_values(cls, business_start: str, grace_minutes) -> "PunctualityPolicy":
        try:
            grace = int(str(grace_minutes).strip())
        except ValueError:
            raise ConfigError(f"Invalid grace minutes {grace_minutes!r}") from None
        if grace < 0:
            raise ConfigError(f"Grace minutes must not be negative, got {grace}")
        return cls(start_minutes=parse_clock_time(business_start), grace_minutes=grace)


PolicyProvider = Callable[[], PunctualityPolicy]


def classify(punch_in: Optional[datetime], policy: PunctualityPolicy) -> Punctuality:
    """Classify a punch-in against the policy. Both window boundaries are on-time."""
    if punch_in is None:
        return Punctuality.UNKNOWN

    minute = minutes_of_day(punch_in)
    if minute < policy.start_minutes:
        return Punctuality.EARLY
    if minute <= policy.start_minutes + policy.grace_minutes:
        return Punctuality.ON_TIME
    return Punctuality.LATE


def env_policy_provider(
    *,
    business_start: str = DEFAULT_BUSINESS_START,
    grace_minutes: int = DEFAULT_GRACE_MINUTES,
) -> PolicyProvider:
    """Build a provider that re-reads BUSINESS_START / GRACE_MINUTES on every call.

    The arguments are the settings-module fallbacks used when the variables are unset.
    """

    def provide() -> PunctualityPolicy:
        return PunctualityPolicy.from_values(
            os.environ.get("BUSINESS_START") or business_start,
            os.environ.get("GRACE_MINUTES") or grace_minutes,
        )

    return provide


def static_policy_provider(policy: PunctualityPolicy) -> PolicyProvider:
    return lambda: policy
