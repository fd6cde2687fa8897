from __future__ import annotations

from dataclasses import dataclass

from ..attendance.model import EmployeeRef


@dataclass(frozen=True)
class User:
    """Domain entity: an employee account.

    Note: plain data object, no DB access code here.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    is_admin: bool = False

    def as_employee(self) -> EmployeeRef:
        return EmployeeRef(employee_id=self.user_id, name=self.name, email=self.email)
