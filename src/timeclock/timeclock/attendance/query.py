from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

from ..common.datetime_utils import date_key
from ..common.validators import optional_iso_date, positive_int
from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MAX_QUERY_OFFSET
from ..core.enums import Punctuality
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .model import AttendanceFilter, AttendanceView
from .repository import AttendanceRepository


@dataclass(frozen=True)
class AttendanceAnalytics:
    total_employees: int
    present_today: int
    on_time_count: int
    late_count: int
    attendance_rate: float

    def to_dict(self) -> dict:
        return {
            "totalEmployees": self.total_employees,
            "presentToday": self.present_today,
            "onTimeCount": self.on_time_count,
            "lateCount": self.late_count,
            "attendanceRate": self.attendance_rate,
        }


def build_filter(args: Mapping[str, Optional[str]]) -> AttendanceFilter:
    """Validate raw query-string values (date, dateFrom, dateTo, punctuality, search)."""
    punctuality = (args.get("punctuality") or "").strip()
    if punctuality:
        try:
            punctuality_value: Optional[Punctuality] = Punctuality(punctuality)
        except ValueError:
            allowed = ", ".join(p.value for p in Punctuality)
            raise ValidationError(f"punctuality must be one of: {allowed}") from None
    else:
        punctuality_value = None

    search = (args.get("search") or "").strip()
    return AttendanceFilter(
        date=optional_iso_date(args.get("date"), "date"),
        date_from=optional_iso_date(args.get("dateFrom"), "dateFrom"),
        date_to=optional_iso_date(args.get("dateTo"), "dateTo"),
        punctuality=punctuality_value,
        search=search or None,
    )


def attendance_rate(present: int, total: int) -> float:
    if total == 0:
        return 0.0
    rate = Decimal(present) * 100 / Decimal(total)
    return float(rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class AttendanceQueryService:
    """Listing and daily analytics over stored attendance records."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        max_page_size: int = MAX_PAGE_SIZE,
    ):
        self._attendance = attendance
        self._users = users
        self._max_page_size = int(max_page_size)

    def list_records(self, flt: AttendanceFilter, *, page=None, limit=None) -> list[AttendanceView]:
        """Newest date first, then newest record first; ``limit`` is capped at the max page size."""
        page = positive_int(page, "page", default=DEFAULT_PAGE)
        limit = min(positive_int(limit, "limit", default=DEFAULT_PAGE_SIZE), self._max_page_size)
        offset = (page - 1) * limit
        if offset > MAX_QUERY_OFFSET:
            return []
        return list(self._attendance.query(flt, offset=offset, limit=limit))

    def analytics(self, reference_date: Optional[str] = None) -> AttendanceAnalytics:
        work_date = reference_date or date_key()
        total_employees = self._users.count()
        counts = self._attendance.count_by_punctuality(work_date)

        present = sum(counts.values())
        return AttendanceAnalytics(
            total_employees=total_employees,
            present_today=present,
            on_time_count=counts.get(Punctuality.ON_TIME, 0),
            late_count=counts.get(Punctuality.LATE, 0),
            attendance_rate=attendance_rate(present, total_employees),
        )
