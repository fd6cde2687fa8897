from __future__ import annotations

from datetime import datetime

import pytest

from src.timeclock.timeclock.attendance.punctuality import PunctualityPolicy, static_policy_provider
from src.timeclock.timeclock.attendance.query import AttendanceQueryService
from src.timeclock.timeclock.attendance.service import AttendanceService
from src.timeclock.timeclock.container import Container
from src.timeclock.timeclock.users.service import AuthService
from tests.fakes import InMemoryAttendance, InMemoryUsers, make_user


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 15, 9, 5, 0)


@pytest.fixture
def policy() -> PunctualityPolicy:
    return PunctualityPolicy(start_minutes=9 * 60, grace_minutes=10)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers(
        [
            make_user(1, "Alice Employee", "alice@example.com", password="password123"),
            make_user(2, "Bob Builder", "bob@example.com"),
            make_user(3, "Admin", "admin@example.com", is_admin=True),
        ]
    )


@pytest.fixture
def attendance_repo(users_repo) -> InMemoryAttendance:
    return InMemoryAttendance(users_repo)


@pytest.fixture
def attendance_service(attendance_repo, users_repo, policy) -> AttendanceService:
    return AttendanceService(attendance_repo, users_repo, policy_provider=static_policy_provider(policy))


@pytest.fixture
def query_service(attendance_repo, users_repo) -> AttendanceQueryService:
    return AttendanceQueryService(attendance_repo, users_repo, max_page_size=100)


@pytest.fixture
def container(users_repo, attendance_repo, attendance_service, query_service) -> Container:
    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo),
        attendance_service=attendance_service,
        query_service=query_service,
    )


@pytest.fixture
def app(container, monkeypatch):
    from src.timeclock.timeclock.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in_client(client):
    with client.session_transaction() as sess:
        sess["user_id"] = 1
    return client
