from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.punctuality import env_policy_provider
from .attendance.query import AttendanceQueryService
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_BUSINESS_START, DEFAULT_GRACE_MINUTES, MAX_PAGE_SIZE
from .database.connection import DBConfig, DatabaseConnection
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    attendance_service: AttendanceService
    query_service: AttendanceQueryService


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    policy_provider = env_policy_provider(
        business_start=getattr(settings, "BUSINESS_START", DEFAULT_BUSINESS_START),
        grace_minutes=getattr(settings, "GRACE_MINUTES", DEFAULT_GRACE_MINUTES),
    )

    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo),
        attendance_service=AttendanceService(attendance_repo, users_repo, policy_provider=policy_provider),
        query_service=AttendanceQueryService(
            attendance_repo,
            users_repo,
            max_page_size=getattr(settings, "MAX_PAGE_SIZE", MAX_PAGE_SIZE),
        ),
    )
