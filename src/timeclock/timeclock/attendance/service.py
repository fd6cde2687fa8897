from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from decimal import ROUND_FLOOR, Decimal

from ..common.datetime_utils import date_key, now_local
from ..core.exceptions import (
    AlreadyPunchedIn,
    AlreadyPunchedOut,
    ConflictError,
    NoPunchInRecord,
    ValidationError,
)
from ..users.repository import UserRepository
from .model import AttendanceView
from .punctuality import PolicyProvider, classify
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def worked_hours(punch_in: datetime, punch_out: datetime) -> float:
    """Elapsed hours to two decimals, ties rounded toward +infinity.

    Negative spans (punch out before punch in) are kept as-is, so -0.125 becomes -0.12.
    """
    seconds = Decimal(str((punch_out - punch_in).total_seconds()))
    cents = (seconds / Decimal(36) + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR)
    return float(cents / 100)


class AttendanceService:
    """Punch-in / punch-out transitions for one employee's record of the day.

    States per (employee, date): no record -> punched in -> punched out (terminal).
    Validation runs before any write, and every write is a single conditional
    statement, so a rejected or failed punch leaves the stored record untouched.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        policy_provider: PolicyProvider,
    ):
        self._attendance = attendance
        self._users = users
        self._policy_provider = policy_provider

    def punch_in(self, employee_id: int, *, now: datetime | None = None) -> AttendanceView:
        now = now or now_local()
        work_date = date_key(now)
        employee = self._employee(employee_id)
        # Configuration problems surface before anything is written.
        punctuality = classify(now, self._policy_provider())

        record = self._attendance.find_by_key(employee_id, work_date)
        if record is None:
            try:
                record = self._attendance.create(
                    employee_id=employee_id,
                    work_date=work_date,
                    created_at=now,
                    punch_in=now,
                    punctuality=punctuality,
                )
                logger.info("Employee %s punched in on %s (%s)", employee_id, work_date, punctuality.value)
                return AttendanceView(record=record, employee=employee)
            except ConflictError:
                logger.warning("Concurrent punch-in for employee %s on %s, re-reading", employee_id, work_date)
                record = self._attendance.find_by_key(employee_id, work_date)
                if record is None:
                    raise

        if record.punch_in is not None:
            raise AlreadyPunchedIn()

        updated = replace(record, punch_in=now, punctuality=punctuality)
        if not self._attendance.save_punch_in(updated):
            raise AlreadyPunchedIn()

        logger.info("Employee %s punched in on %s (%s)", employee_id, work_date, punctuality.value)
        return AttendanceView(record=updated, employee=employee)

    def punch_out(self, employee_id: int, *, now: datetime | None = None) -> AttendanceView:
        now = now or now_local()
        work_date = date_key(now)
        employee = self._employee(employee_id)

        record = self._attendance.find_by_key(employee_id, work_date)
        if record is None or record.punch_in is None:
            raise NoPunchInRecord()
        if record.punch_out is not None:
            raise AlreadyPunchedOut()

        hours = worked_hours(record.punch_in, now)
        if hours <= 0:
            logger.warning(
                "Non-positive worked hours (%s) for employee %s on %s: punch out precedes punch in",
                hours,
                employee_id,
                work_date,
            )

        updated = replace(record, punch_out=now, total_worked_hours=hours)
        if not self._attendance.save_punch_out(updated):
            raise AlreadyPunchedOut()

        logger.info("Employee %s punched out on %s after %.2fh", employee_id, work_date, hours)
        return AttendanceView(record=updated, employee=employee)

    def _employee(self, employee_id: int):
        user = self._users.get_by_id(employee_id)
        if not user:
            raise ValidationError("Employee not found")
        return user.as_employee()
