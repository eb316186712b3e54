from __future__ import annotations

import logging
from typing import Iterable, Mapping

from ..attendance.factory import AttendanceStrategyFactory, classify_checkin
from ..attendance.model import MonthlyAttendanceRecord, TimeRange
from ..core.enums import AttendanceOutcome, ReportGranularity
from ..roster.model import Classroom, Student
from ..roster.service import students_by_classroom
from .model import AttendanceReport, DayLevelReport, MonthLevelReport

logger = logging.getLogger(__name__)


class ReportAggregator:
    """Fold monthly attendance records into per-classroom outcome counts.

    The fold is pure: same records and filters always give the same counts.
    Records of students missing from the roster, or whose classroom was
    filtered out, are dropped silently and only show up in ``report.stats``.
    A record whose day mapping cannot be decoded raises MalformedRecordError.

    With ``infer_missing_days`` a classroom member without an entry for a day
    on which the classroom has any entry counts as absent, the same as a day
    entry without check-in.
    """

    def __init__(
        self,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        infer_missing_days: bool = True,
    ):
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._infer_missing_days = infer_missing_days

    def aggregate(
        self,
        records: Iterable[MonthlyAttendanceRecord],
        classrooms: Iterable[Classroom],
        students: Mapping[str, Student],
        time_range: TimeRange,
        tolerance_seconds: int,
        granularity: ReportGranularity,
    ) -> AttendanceReport:
        members = students_by_classroom(students)
        if granularity == ReportGranularity.BY_DAY:
            report: AttendanceReport = DayLevelReport.empty(classrooms, members, time_range.months())
        else:
            report = MonthLevelReport.empty(classrooms, members, time_range.months())

        stats = report.stats
        seen: dict[tuple[str, int, int], set[str]] = {}
        for record in records:
            stats.records_seen += 1
            student = students.get(record.student_id)
            if student is None:
                stats.unknown_student += 1
                continue
            classroom_id = student.classroom_id
            if not report.has_classroom(classroom_id):
                stats.unmapped_classroom += 1
                continue

            month = record.month
            for day, attendance in record.daily_attendances().items():
                if not report.has_month(classroom_id, month) or not time_range.includes(month=month, day=day):
                    stats.days_out_of_range += 1
                    continue
                outcome = classify_checkin(attendance, tolerance_seconds, factory=self._factory)
                report.add(classroom_id, month, day, outcome)
                stats.days_counted += 1
                seen.setdefault((classroom_id, month, day), set()).add(student.student_id)

        if self._infer_missing_days:
            for (classroom_id, month, day), present in sorted(seen.items()):
                for _ in members.get(classroom_id, set()) - present:
                    report.add(classroom_id, month, day, AttendanceOutcome.ABSENT)
                    stats.inferred_absences += 1

        logger.info(
            "Aggregated %s report: %s classrooms, stats=%s",
            granularity.value,
            len(report.classrooms),
            stats.to_dict(),
        )
        return report
