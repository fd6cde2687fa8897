from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Punctuality


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    ``work_date`` is the ``YYYY-MM-DD`` key; (employee_id, work_date) is unique.
    """

    attendance_id: int
    employee_id: int
    work_date: str
    punch_in: Optional[datetime]
    punch_out: Optional[datetime]
    total_worked_hours: float
    punctuality: Punctuality
    created_at: datetime


@dataclass(frozen=True)
class EmployeeRef:
    """Minimal employee projection joined onto records for display."""

    employee_id: int
    name: str
    email: str

    def to_dict(self) -> dict:
        return {"id": self.employee_id, "name": self.name, "email": self.email}


@dataclass(frozen=True)
class AttendanceView:
    """Read-model: a record enriched with employee identity."""

    record: AttendanceRecord
    employee: EmployeeRef

    def to_dict(self) -> dict:
        r = self.record
        return {
            "id": r.attendance_id,
            "employee": self.employee.to_dict(),
            "date": r.work_date,
            "punchIn": r.punch_in.isoformat() if r.punch_in else None,
            "punchOut": r.punch_out.isoformat() if r.punch_out else None,
            "totalWorkedHours": r.total_worked_hours,
            "punctuality": r.punctuality.value,
            "createdAt": r.created_at.isoformat() if r.created_at else None,
        }


@dataclass(frozen=True)
class AttendanceFilter:
    """Listing criteria. The inclusive range wins over ``date`` when both are set.

    Dates are fixed-width ``YYYY-MM-DD`` strings, so range checks compare them
    lexicographically.
    """

    date: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    punctuality: Optional[Punctuality] = None
    search: Optional[str] = None

    def matches_date(self, work_date: str) -> bool:
        if self.date_from or self.date_to:
            if self.date_from and work_date < self.date_from:
                return False
            if self.date_to and work_date > self.date_to:
                return False
            return True
        if self.date:
            return work_date == self.date
        return True
