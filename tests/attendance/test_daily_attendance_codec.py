import json

import pytest

from src.school_attendance.school_attendance.attendance.model import (
    AttendanceMark,
    MonthlyAttendanceRecord,
    TimeRange,
    decode_daily_attendances,
)
from src.school_attendance.school_attendance.core.exceptions import MalformedRecordError


def test_decode_json_text_with_checkin_and_checkout():
    raw = json.dumps({"5": {"E": {"DesfaseSegundos": 30}, "S": {"DesfaseSegundos": -120}}, "6": {"E": {"DesfaseSegundos": None}}})

    days = decode_daily_attendances(raw)

    assert days[5].check_in == AttendanceMark(offset_seconds=30)
    assert days[5].check_out == AttendanceMark(offset_seconds=-120)
    assert days[6].check_in == AttendanceMark(offset_seconds=None)
    assert days[6].check_out is None


def test_decode_accepts_already_decoded_mapping():
    record = MonthlyAttendanceRecord(student_id="S1", month=3, daily_attendances_raw={"1": {}})

    days = record.daily_attendances()

    assert list(days) == [1]
    assert not days[1].has_data


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "[1, 2, 3]",
        json.dumps({"x": {"E": {"DesfaseSegundos": 1}}}),
        json.dumps({"1": "present"}),
        json.dumps({"1": {"E": {"DesfaseSegundos": "late"}}}),
    ],
)
def test_decode_rejects_malformed_payloads(raw):
    with pytest.raises(MalformedRecordError):
        decode_daily_attendances(raw)


@pytest.mark.parametrize("raw", [None, "", b""])
def test_decode_rejects_missing_or_empty_mapping(raw):
    record = MonthlyAttendanceRecord(student_id="S1", month=3, daily_attendances_raw=raw)

    with pytest.raises(MalformedRecordError):
        record.daily_attendances()


def test_decode_keeps_fractional_offsets():
    days = decode_daily_attendances({"5": {"E": {"DesfaseSegundos": 300.5}}})

    assert days[5].check_in == AttendanceMark(offset_seconds=300.5)


def test_time_range_day_bounds_only_apply_to_boundary_months():
    r = TimeRange(from_month=3, to_month=5, from_day=10, to_day=20)

    assert not r.includes(month=3, day=9)
    assert r.includes(month=3, day=10)
    assert r.includes(month=4, day=1)
    assert r.includes(month=4, day=31)
    assert r.includes(month=5, day=20)
    assert not r.includes(month=5, day=21)
    assert r.months() == [3, 4, 5]


def test_time_range_without_both_day_bounds_is_unfiltered():
    r = TimeRange(from_month=3, to_month=3, from_day=10, to_day=None)

    assert r.includes(month=3, day=1)
