from __future__ import annotations

import json

import pytest

from src.school_attendance.school_attendance.attendance.model import MonthlyAttendanceRecord, TimeRange
from src.school_attendance.school_attendance.core.enums import EducationLevel, ReportGranularity
from src.school_attendance.school_attendance.core.exceptions import MalformedRecordError
from src.school_attendance.school_attendance.reports.aggregator import ReportAggregator
from src.school_attendance.school_attendance.reports.model import DayLevelReport, MonthLevelReport
from src.school_attendance.school_attendance.roster.model import Classroom, Student

TOLERANCE = 300


def _classroom(classroom_id: str, grade: int = 3, section: str = "A") -> Classroom:
    return Classroom(classroom_id=classroom_id, level=EducationLevel.PRIMARY, grade=grade, section=section)


def _students(**by_id: str) -> dict[str, Student]:
    return {sid: Student(student_id=sid, classroom_id=cid) for sid, cid in by_id.items()}


def _record(student_id: str, month: int, days: dict) -> MonthlyAttendanceRecord:
    return MonthlyAttendanceRecord(student_id=student_id, month=month, daily_attendances_raw=json.dumps(days))


def _in(offset):
    return {"E": {"DesfaseSegundos": offset}}


def test_end_to_end_day_level_with_missing_day_entry():
    records = [
        _record("S1", 3, {"5": _in(30)}),
        _record("S2", 3, {"6": _in(0)}),
    ]

    report = ReportAggregator().aggregate(
        records,
        [_classroom("A1")],
        _students(S1="A1", S2="A1"),
        TimeRange(from_month=3, to_month=3),
        TOLERANCE,
        ReportGranularity.BY_DAY,
    )

    assert isinstance(report, DayLevelReport)
    out = report.to_dict()
    assert out["A1"]["total_students"] == 2
    assert out["A1"]["counts"]["3"]["5"] == {"EARLY": 1, "LATE": 0, "ABSENT": 1}


def test_month_level_classification_counts():
    records = [
        _record("S1", 3, {"1": _in(30), "2": _in(301), "3": _in(None), "4": {}}),
        _record("S2", 3, {"1": _in(300), "2": {"S": {"DesfaseSegundos": 0}}, "3": _in(-60), "4": _in(900)}),
    ]

    report = ReportAggregator().aggregate(
        records,
        [_classroom("A1")],
        _students(S1="A1", S2="A1"),
        TimeRange(from_month=3, to_month=4),
        TOLERANCE,
        ReportGranularity.BY_MONTH,
    )

    assert isinstance(report, MonthLevelReport)
    march = report.classrooms["A1"].counts[3]
    assert (march.early, march.late, march.absent) == (3, 2, 3)
    # Months in range are present even without data.
    assert report.classrooms["A1"].counts[4].total == 0


def test_total_students_counts_distinct_roster_members_only():
    students = _students(S1="A1", S2="A1", S3="A1", S4="B1")
    records = [_record("S1", 3, {"1": _in(0)}), _record("S1", 3, {"2": _in(0)})]

    report = ReportAggregator().aggregate(
        records,
        [_classroom("A1"), _classroom("B1", section="B"), _classroom("C1", section="C")],
        students,
        TimeRange(from_month=3, to_month=3),
        TOLERANCE,
        ReportGranularity.BY_MONTH,
    )

    assert report.classrooms["A1"].total_students == 3
    assert report.classrooms["B1"].total_students == 1
    assert report.classrooms["C1"].total_students == 0


def test_unknown_students_and_filtered_classrooms_are_skipped():
    records = [
        _record("GHOST", 3, {"1": _in(0)}),
        _record("S2", 3, {"1": _in(0)}),
        _record("S1", 3, {"1": _in(0)}),
    ]

    report = ReportAggregator().aggregate(
        records,
        [_classroom("A1")],
        _students(S1="A1", S2="B1"),
        TimeRange(from_month=3, to_month=3),
        TOLERANCE,
        ReportGranularity.BY_DAY,
    )

    assert list(report.classrooms) == ["A1"]
    assert report.classrooms["A1"].counts[3][1].early == 1
    assert report.stats.unknown_student == 1
    assert report.stats.unmapped_classroom == 1
    assert report.stats.records_seen == 3


def test_day_bounds_filter_only_boundary_months():
    days = {str(d): _in(0) for d in (1, 9, 10, 15, 20, 21, 31)}
    records = [_record("S1", m, days) for m in (3, 4, 5)]

    report = ReportAggregator().aggregate(
        records,
        [_classroom("A1")],
        _students(S1="A1"),
        TimeRange(from_month=3, to_month=5, from_day=10, to_day=20),
        TOLERANCE,
        ReportGranularity.BY_DAY,
    )

    counts = report.classrooms["A1"].counts
    assert sorted(counts[3]) == [10, 15, 20, 21, 31]
    assert sorted(counts[4]) == [1, 9, 10, 15, 20, 21, 31]
    assert sorted(counts[5]) == [1, 9, 10, 15, 20]
    assert report.stats.days_out_of_range == 2 + 2


def test_records_outside_month_range_are_ignored():
    report = ReportAggregator().aggregate(
        [_record("S1", 7, {"1": _in(0)})],
        [_classroom("A1")],
        _students(S1="A1"),
        TimeRange(from_month=3, to_month=4),
        TOLERANCE,
        ReportGranularity.BY_MONTH,
    )

    assert sum(c.total for c in report.classrooms["A1"].counts.values()) == 0
    assert report.stats.days_out_of_range == 1


def test_day_level_collapses_to_month_level_totals():
    students = _students(S1="A1", S2="A1", S3="B1")
    classrooms = [_classroom("A1"), _classroom("B1", section="B")]
    records = [
        _record("S1", 3, {"1": _in(10), "2": _in(400), "28": _in(None)}),
        _record("S2", 3, {"1": _in(500), "3": {}}),
        _record("S3", 4, {"2": _in(0), "5": _in(301)}),
        _record("S1", 4, {"2": _in(-5)}),
    ]
    time_range = TimeRange(from_month=3, to_month=4, from_day=2, to_day=30)

    aggregator = ReportAggregator()
    by_day = aggregator.aggregate(records, classrooms, students, time_range, TOLERANCE, ReportGranularity.BY_DAY)
    by_month = aggregator.aggregate(records, classrooms, students, time_range, TOLERANCE, ReportGranularity.BY_MONTH)

    assert by_day.collapse_to_months().to_dict() == by_month.to_dict()


def test_aggregation_is_idempotent():
    students = _students(S1="A1", S2="A1")
    records = [_record("S1", 3, {"1": _in(10), "2": _in(400)}), _record("S2", 3, {"2": _in(None)})]
    args = ([_classroom("A1")], students, TimeRange(from_month=3, to_month=3), TOLERANCE, ReportGranularity.BY_DAY)

    aggregator = ReportAggregator()
    first = json.dumps(aggregator.aggregate(records, *args).to_dict(), sort_keys=True)
    second = json.dumps(aggregator.aggregate(records, *args).to_dict(), sort_keys=True)

    assert first == second


def test_missing_day_inference_can_be_disabled():
    records = [_record("S1", 3, {"5": _in(30)})]

    report = ReportAggregator(infer_missing_days=False).aggregate(
        records,
        [_classroom("A1")],
        _students(S1="A1", S2="A1"),
        TimeRange(from_month=3, to_month=3),
        TOLERANCE,
        ReportGranularity.BY_DAY,
    )

    assert report.classrooms["A1"].counts[3][5].to_dict() == {"EARLY": 1, "LATE": 0, "ABSENT": 0}


def test_malformed_day_mapping_propagates():
    records = [MonthlyAttendanceRecord(student_id="S1", month=3, daily_attendances_raw="{broken")]

    with pytest.raises(MalformedRecordError):
        ReportAggregator().aggregate(
            records,
            [_classroom("A1")],
            _students(S1="A1"),
            TimeRange(from_month=3, to_month=3),
            TOLERANCE,
            ReportGranularity.BY_MONTH,
        )


def test_fractional_offset_just_past_tolerance_is_late():
    records = [_record("S1", 3, {"5": _in(300.5)}), _record("S2", 3, {"5": _in(300.0)})]

    report = ReportAggregator().aggregate(
        records,
        [_classroom("A1")],
        _students(S1="A1", S2="A1"),
        TimeRange(from_month=3, to_month=3),
        TOLERANCE,
        ReportGranularity.BY_MONTH,
    )

    march = report.classrooms["A1"].counts[3]
    assert (march.early, march.late, march.absent) == (1, 1, 0)
