from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import Punctuality
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceFilter, AttendanceRecord, AttendanceView, EmployeeRef
from .repository import AttendanceRepository

_RECORD_COLUMNS = (
    "ar.attendance_id, ar.employee_id, ar.work_date, ar.punch_in, ar.punch_out, "
    "ar.total_worked_hours, ar.punctuality, ar.created_at"
)


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    work_date = r["work_date"]
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=work_date if isinstance(work_date, str) else work_date.strftime("%Y-%m-%d"),
        punch_in=r.get("punch_in"),
        punch_out=r.get("punch_out"),
        total_worked_hours=float(r.get("total_worked_hours") or 0),
        punctuality=Punctuality(r.get("punctuality") or Punctuality.UNKNOWN.value),
        created_at=r["created_at"],
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_key(self, employee_id: int, work_date: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE ar.employee_id=%s AND ar.work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(
        self,
        *,
        employee_id: int,
        work_date: str,
        created_at: datetime,
        punch_in: Optional[datetime] = None,
        punctuality: Punctuality = Punctuality.UNKNOWN,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, punch_in, punctuality, created_at)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(employee_id), work_date, punch_in, punctuality.value, created_at),
                )
            except mysql.connector.IntegrityError as exc:
                if is_duplicate_key(exc):
                    raise ConflictError(
                        f"Attendance for employee {employee_id} on {work_date} already exists"
                    ) from exc
                raise
            attendance_id = int(cur.lastrowid)

        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=int(employee_id),
            work_date=work_date,
            punch_in=punch_in,
            punch_out=None,
            total_worked_hours=0.0,
            punctuality=punctuality,
            created_at=created_at,
        )

    def save_punch_in(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET punch_in=%s, punctuality=%s
                WHERE attendance_id=%s AND punch_in IS NULL
                """,
                (record.punch_in, record.punctuality.value, record.attendance_id),
            )
            return cur.rowcount > 0

    def save_punch_out(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET punch_out=%s, total_worked_hours=%s
                WHERE attendance_id=%s AND punch_in IS NOT NULL AND punch_out IS NULL
                """,
                (record.punch_out, record.total_worked_hours, record.attendance_id),
            )
            return cur.rowcount > 0

    def query(self, flt: AttendanceFilter, *, offset: int, limit: int) -> Sequence[AttendanceView]:
        clauses: list[str] = []
        params: list[object] = []

        if flt.date_from or flt.date_to:
            if flt.date_from:
                clauses.append("ar.work_date >= %s")
                params.append(flt.date_from)
            if flt.date_to:
                clauses.append("ar.work_date <= %s")
                params.append(flt.date_to)
        elif flt.date:
            clauses.append("ar.work_date = %s")
            params.append(flt.date)

        if flt.punctuality is not None:
            clauses.append("ar.punctuality = %s")
            params.append(flt.punctuality.value)
        if flt.search:
            clauses.append("LOWER(u.name) LIKE %s")
            params.append(f"%{_escape_like(flt.search.lower())}%")

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.extend([int(limit), int(offset)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}, u.name AS employee_name, u.email AS employee_email
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.employee_id
                {where}
                ORDER BY ar.work_date DESC, ar.created_at DESC, ar.attendance_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceView(
                    record=_to_record(r),
                    employee=EmployeeRef(
                        employee_id=int(r["employee_id"]),
                        name=r["employee_name"],
                        email=r["employee_email"],
                    ),
                )
                for r in rows
            ]

    def count_by_punctuality(self, work_date: str) -> Dict[Punctuality, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT punctuality, COUNT(*) AS total
                FROM attendance_records
                WHERE work_date=%s
                GROUP BY punctuality
                """,
                (work_date,),
            )
            return {Punctuality(r["punctuality"]): int(r["total"]) for r in fetchall(cur)}
