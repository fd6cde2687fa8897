from __future__ import annotations

from datetime import datetime

import pytest

from src.timeclock.timeclock.attendance.model import AttendanceFilter
from src.timeclock.timeclock.attendance.query import AttendanceQueryService, attendance_rate, build_filter
from src.timeclock.timeclock.core.enums import Punctuality
from src.timeclock.timeclock.core.exceptions import ValidationError
from tests.fakes import InMemoryAttendance, InMemoryUsers


@pytest.fixture
def seeded(attendance_repo):
    rows = [
        (1, "2023-12-31", datetime(2023, 12, 31, 9, 0), Punctuality.ON_TIME),
        (1, "2024-01-01", datetime(2024, 1, 1, 9, 20), Punctuality.LATE),
        (2, "2024-01-01", datetime(2024, 1, 1, 8, 40), Punctuality.EARLY),
        (1, "2024-01-15", datetime(2024, 1, 15, 9, 5), Punctuality.ON_TIME),
        (2, "2024-01-15", datetime(2024, 1, 15, 9, 2), Punctuality.ON_TIME),
        (3, "2024-01-15", datetime(2024, 1, 15, 9, 45), Punctuality.LATE),
        (2, "2024-01-31", datetime(2024, 1, 31, 9, 0), Punctuality.ON_TIME),
        (1, "2024-02-01", datetime(2024, 2, 1, 9, 0), Punctuality.ON_TIME),
    ]
    for employee_id, work_date, punch_in, punctuality in rows:
        attendance_repo.add(employee_id, work_date, created_at=punch_in, punch_in=punch_in, punctuality=punctuality)
    return attendance_repo


def _keys(views):
    return [(v.record.work_date, v.record.employee_id) for v in views]


def test_list_range_is_inclusive_and_sorted_newest_first(query_service, seeded):
    views = query_service.list_records(AttendanceFilter(date_from="2024-01-01", date_to="2024-01-31"))

    assert _keys(views) == [
        ("2024-01-31", 2),
        ("2024-01-15", 3),
        ("2024-01-15", 1),
        ("2024-01-15", 2),
        ("2024-01-01", 1),
        ("2024-01-01", 2),
    ]


def test_list_exact_date(query_service, seeded):
    views = query_service.list_records(AttendanceFilter(date="2024-01-01"))
    assert {v.record.employee_id for v in views} == {1, 2}


def test_list_range_overrides_exact_date(query_service, seeded):
    views = query_service.list_records(AttendanceFilter(date="2023-12-31", date_from="2024-02-01"))
    assert _keys(views) == [("2024-02-01", 1)]


def test_list_filters_by_punctuality_and_name(query_service, seeded):
    late = query_service.list_records(AttendanceFilter(punctuality=Punctuality.LATE))
    assert _keys(late) == [("2024-01-15", 3), ("2024-01-01", 1)]

    bob = query_service.list_records(AttendanceFilter(search="BUILD"))
    assert {v.employee.name for v in bob} == {"Bob Builder"}
    assert len(bob) == 3


def test_list_paginates(query_service, seeded):
    page1 = query_service.list_records(AttendanceFilter(), page="1", limit="3")
    page2 = query_service.list_records(AttendanceFilter(), page=2, limit=3)
    page4 = query_service.list_records(AttendanceFilter(), page=4, limit=3)

    assert len(page1) == 3
    assert len(page2) == 3
    assert page4 == []
    assert not set(_keys(page1)) & set(_keys(page2))


def test_list_defaults_to_fifty(users_repo):
    repo = InMemoryAttendance(users_repo)
    for day in range(1, 61):
        created = datetime(2024, 3, 1, 9, 0).replace(month=3 + (day - 1) // 30, day=(day - 1) % 30 + 1)
        repo.add(1, created.strftime("%Y-%m-%d"), created_at=created, punch_in=created)

    svc = AttendanceQueryService(repo, users_repo)
    assert len(svc.list_records(AttendanceFilter())) == 50


def test_list_caps_page_size(query_service, seeded, monkeypatch):
    captured = {}

    def fake_query(flt, *, offset, limit):
        captured.update(offset=offset, limit=limit)
        return []

    monkeypatch.setattr(seeded, "query", fake_query)
    query_service.list_records(AttendanceFilter(), page=3, limit=100000)

    assert captured == {"offset": 200, "limit": 100}


@pytest.mark.parametrize("page, limit", [("0", None), (None, "-5"), ("abc", None), (None, "1.5")])
def test_list_rejects_bad_paging(query_service, page, limit):
    with pytest.raises(ValidationError):
        query_service.list_records(AttendanceFilter(), page=page, limit=limit)


def test_build_filter_normalizes_values():
    flt = build_filter({"dateFrom": "2024-01-01", "dateTo": "2024-01-31", "punctuality": "on-time", "search": "  ali "})

    assert flt == AttendanceFilter(
        date=None,
        date_from="2024-01-01",
        date_to="2024-01-31",
        punctuality=Punctuality.ON_TIME,
        search="ali",
    )
    assert build_filter({}) == AttendanceFilter()


@pytest.mark.parametrize("args", [{"date": "2024-13-01"}, {"dateFrom": "01/01/2024"}, {"punctuality": "tardy"}])
def test_build_filter_rejects_bad_values(args):
    with pytest.raises(ValidationError):
        build_filter(args)


def test_analytics_for_reference_date(query_service, seeded):
    data = query_service.analytics("2024-01-15")

    assert data.total_employees == 3
    assert data.present_today == 3
    assert data.on_time_count == 2
    assert data.late_count == 1
    assert data.attendance_rate == 100.0


def test_analytics_counts_every_record_of_the_day(query_service, seeded):
    data = query_service.analytics("2024-01-01")

    assert data.present_today == 2
    assert data.on_time_count == 0
    assert data.late_count == 1
    assert data.attendance_rate == 66.67
    assert data.to_dict() == {
        "totalEmployees": 3,
        "presentToday": 2,
        "onTimeCount": 0,
        "lateCount": 1,
        "attendanceRate": 66.67,
    }


def test_analytics_defaults_to_today(query_service, seeded, monkeypatch):
    from src.timeclock.timeclock.common import datetime_utils

    monkeypatch.setattr(datetime_utils, "now_local", lambda: datetime(2024, 1, 31, 12, 0))
    data = query_service.analytics()

    assert data.present_today == 1
    assert data.attendance_rate == 33.33


def test_analytics_without_employees_has_zero_rate():
    svc = AttendanceQueryService(InMemoryAttendance(), InMemoryUsers())
    data = svc.analytics("2024-01-15")

    assert data.total_employees == 0
    assert data.attendance_rate == 0


def test_attendance_rate_rounds_half_up():
    assert attendance_rate(1, 8) == 12.5
    assert attendance_rate(1, 6) == 16.67


def test_analytics_counts_unknown_records_as_present(query_service, attendance_repo):
    attendance_repo.add(1, "2024-01-15", created_at=datetime(2024, 1, 15, 0, 0))
    attendance_repo.add(
        2,
        "2024-01-15",
        created_at=datetime(2024, 1, 15, 9, 5),
        punch_in=datetime(2024, 1, 15, 9, 5),
        punctuality=Punctuality.ON_TIME,
    )

    data = query_service.analytics("2024-01-15")

    assert data.present_today == 2
    assert data.on_time_count == 1
    assert data.late_count == 0
    assert data.attendance_rate == 66.67


def test_list_far_page_is_empty_without_querying(query_service, seeded, monkeypatch):
    def fail_query(flt, *, offset, limit):
        raise AssertionError("query should not run")

    monkeypatch.setattr(seeded, "query", fail_query)

    assert query_service.list_records(AttendanceFilter(), page=str(10**20), limit="50") == []
