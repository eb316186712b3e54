from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Mapping, Union

from ..core.enums import AttendanceOutcome, ReportGranularity
from ..roster.model import Classroom


@dataclass
class OutcomeCounts:
    early: int = 0
    late: int = 0
    absent: int = 0

    def add(self, outcome: AttendanceOutcome) -> None:
        if outcome == AttendanceOutcome.EARLY:
            self.early += 1
        elif outcome == AttendanceOutcome.LATE:
            self.late += 1
        else:
            self.absent += 1

    def merge(self, other: "OutcomeCounts") -> None:
        self.early += other.early
        self.late += other.late
        self.absent += other.absent

    @property
    def total(self) -> int:
        return self.early + self.late + self.absent

    def to_dict(self) -> dict:
        return {
            AttendanceOutcome.EARLY.value: self.early,
            AttendanceOutcome.LATE.value: self.late,
            AttendanceOutcome.ABSENT.value: self.absent,
        }


@dataclass
class AggregationStats:
    """Counts of what the fold saw and dropped, for observability."""

    records_seen: int = 0
    unknown_student: int = 0
    unmapped_classroom: int = 0
    days_out_of_range: int = 0
    days_counted: int = 0
    inferred_absences: int = 0

    def to_dict(self) -> dict:
        return {
            "records_seen": self.records_seen,
            "unknown_student": self.unknown_student,
            "unmapped_classroom": self.unmapped_classroom,
            "days_out_of_range": self.days_out_of_range,
            "days_counted": self.days_counted,
            "inferred_absences": self.inferred_absences,
        }


@dataclass
class MonthLevelClassroomReport:
    total_students: int
    counts: dict[int, OutcomeCounts] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total_students": self.total_students,
            "counts": {str(month): c.to_dict() for month, c in sorted(self.counts.items())},
        }


@dataclass
class DayLevelClassroomReport:
    total_students: int
    counts: dict[int, dict[int, OutcomeCounts]] = field(default_factory=dict)

    def counter_for(self, month: int, day: int) -> OutcomeCounts:
        days = self.counts.setdefault(month, {})
        if day not in days:
            days[day] = OutcomeCounts()
        return days[day]

    def to_dict(self) -> dict:
        return {
            "total_students": self.total_students,
            "counts": {
                str(month): {str(day): c.to_dict() for day, c in sorted(days.items())}
                for month, days in sorted(self.counts.items())
            },
        }


@dataclass
class MonthLevelReport:
    granularity: ClassVar[ReportGranularity] = ReportGranularity.BY_MONTH

    classrooms: dict[str, MonthLevelClassroomReport] = field(default_factory=dict)
    stats: AggregationStats = field(default_factory=AggregationStats)

    @classmethod
    def empty(cls, classrooms: Iterable[Classroom], members: Mapping[str, set], months: Iterable[int]) -> "MonthLevelReport":
        months = list(months)
        report = cls()
        for c in classrooms:
            report.classrooms[c.classroom_id] = MonthLevelClassroomReport(
                total_students=len(members.get(c.classroom_id, ())),
                counts={m: OutcomeCounts() for m in months},
            )
        return report

    def has_classroom(self, classroom_id: str) -> bool:
        return classroom_id in self.classrooms

    def has_month(self, classroom_id: str, month: int) -> bool:
        return month in self.classrooms[classroom_id].counts

    def add(self, classroom_id: str, month: int, day: int, outcome: AttendanceOutcome) -> None:
        self.classrooms[classroom_id].counts[month].add(outcome)

    def to_dict(self) -> dict:
        return {classroom_id: c.to_dict() for classroom_id, c in self.classrooms.items()}


@dataclass
class DayLevelReport:
    granularity: ClassVar[ReportGranularity] = ReportGranularity.BY_DAY

    classrooms: dict[str, DayLevelClassroomReport] = field(default_factory=dict)
    stats: AggregationStats = field(default_factory=AggregationStats)

    @classmethod
    def empty(cls, classrooms: Iterable[Classroom], members: Mapping[str, set], months: Iterable[int]) -> "DayLevelReport":
        months = list(months)
        report = cls()
        for c in classrooms:
            # Day buckets are created lazily as days are encountered.
            report.classrooms[c.classroom_id] = DayLevelClassroomReport(
                total_students=len(members.get(c.classroom_id, ())),
                counts={m: {} for m in months},
            )
        return report

    def has_classroom(self, classroom_id: str) -> bool:
        return classroom_id in self.classrooms

    def has_month(self, classroom_id: str, month: int) -> bool:
        return month in self.classrooms[classroom_id].counts

    def add(self, classroom_id: str, month: int, day: int, outcome: AttendanceOutcome) -> None:
        self.classrooms[classroom_id].counter_for(month, day).add(outcome)

    def collapse_to_months(self) -> MonthLevelReport:
        collapsed = MonthLevelReport(stats=self.stats)
        for classroom_id, c in self.classrooms.items():
            months: dict[int, OutcomeCounts] = {}
            for month, days in c.counts.items():
                total = OutcomeCounts()
                for counts in days.values():
                    total.merge(counts)
                months[month] = total
            collapsed.classrooms[classroom_id] = MonthLevelClassroomReport(total_students=c.total_students, counts=months)
        return collapsed

    def to_dict(self) -> dict:
        return {classroom_id: c.to_dict() for classroom_id, c in self.classrooms.items()}


AttendanceReport = Union[DayLevelReport, MonthLevelReport]
