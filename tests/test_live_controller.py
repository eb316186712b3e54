from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import pytest

from src.school_attendance.school_attendance.attendance.live_service import LiveDayResult
from src.school_attendance.school_attendance.attendance.model import AttendanceMark, DailyAttendance
from src.school_attendance.school_attendance.attendance.tolerance import LateToleranceService
from src.school_attendance.school_attendance.core.enums import EducationLevel
from src.school_attendance.school_attendance.main import create_app


class FakeDecoder:
    def __init__(self):
        self.calls = []

    def decode_current_day(self, level, grade, day):
        self.calls.append((level, grade, day))
        return LiveDayResult(
            attendances={
                "77742971": DailyAttendance(check_in=AttendanceMark(offset_seconds=120)),
                "111": DailyAttendance(check_in=AttendanceMark(offset_seconds=301)),
                "222": DailyAttendance(check_in=AttendanceMark(offset_seconds=None)),
                "333": DailyAttendance(check_out=AttendanceMark(offset_seconds=0)),
            }
        )


class FakeSettings:
    def __init__(self, minutes):
        self.minutes = minutes
        self.levels = []

    def get_late_tolerance_minutes(self, level):
        self.levels.append(level)
        return self.minutes


@pytest.fixture
def client_and_decoder(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    decoder = FakeDecoder()
    container = SimpleNamespace(live_day_decoder=decoder, late_tolerance=LateToleranceService(FakeSettings(5)))
    app = create_app(container=container)
    return app.test_client(), decoder


def test_today_endpoint_returns_decoded_students(client_and_decoder):
    client, decoder = client_and_decoder

    resp = client.get("/api/attendance/today?level=P&grade=3&date=2025-08-29")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["available"] is True
    assert body["students"]["77742971"]["check_in"] == {"offset_seconds": 120}
    assert body["students"]["77742971"]["check_out"] is None
    assert decoder.calls == [(EducationLevel.PRIMARY, 3, date(2025, 8, 29))]


@pytest.mark.parametrize(
    "query",
    ["level=X&grade=3", "level=P&grade=abc", "level=P", "level=P&grade=3&date=29-08-2025"],
)
def test_today_endpoint_rejects_invalid_query(client_and_decoder, query):
    client, _ = client_and_decoder

    resp = client.get(f"/api/attendance/today?{query}")

    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_today_endpoint_classifies_checkins_with_level_tolerance(client_and_decoder):
    client, _ = client_and_decoder

    body = client.get("/api/attendance/today?level=P&grade=3&date=2025-08-29").get_json()

    assert body["tolerance_seconds"] == 300
    students = body["students"]
    assert students["77742971"]["outcome"] == "EARLY"
    assert students["111"]["outcome"] == "LATE"
    assert students["222"]["outcome"] == "ABSENT"
    # Only a check-out so far: no outcome yet.
    assert students["333"]["outcome"] is None


def test_today_endpoint_falls_back_to_default_tolerance(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    settings = FakeSettings(None)
    container = SimpleNamespace(live_day_decoder=FakeDecoder(), late_tolerance=LateToleranceService(settings))
    client = create_app(container=container).test_client()

    body = client.get("/api/attendance/today?level=S&grade=2&date=2025-08-29").get_json()

    assert body["tolerance_seconds"] == 300
    assert body["students"]["111"]["outcome"] == "LATE"
    assert settings.levels == [EducationLevel.SECONDARY]
