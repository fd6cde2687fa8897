from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Protocol, Sequence

from ..core.enums import Punctuality
from .model import AttendanceFilter, AttendanceRecord, AttendanceView


class AttendanceRepository(Protocol):
    """Store of attendance records keyed by (employee_id, work_date).

    The uniqueness constraint on that key is the source of truth for races:
    ``create`` raises ``ConflictError`` instead of producing a second row, and
    the ``save_*`` writes are conditional so a concurrent punch cannot overwrite.
    """

    def find_by_key(self, employee_id: int, work_date: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        work_date: str,
        created_at: datetime,
        punch_in: Optional[datetime] = None,
        punctuality: Punctuality = Punctuality.UNKNOWN,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def save_punch_in(self, record: AttendanceRecord) -> bool:
        """Persist punch-in fields only if the stored record has no punch-in yet."""

        raise NotImplementedError

    def save_punch_out(self, record: AttendanceRecord) -> bool:
        """Persist punch-out fields only if punched in and not yet punched out."""

        raise NotImplementedError

    def query(self, flt: AttendanceFilter, *, offset: int, limit: int) -> Sequence[AttendanceView]:
        raise NotImplementedError

    def count_by_punctuality(self, work_date: str) -> Dict[Punctuality, int]:
        raise NotImplementedError
