from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import EducationLevel


@dataclass(frozen=True)
class Student:
    student_id: str
    classroom_id: str


@dataclass(frozen=True)
class Classroom:
    classroom_id: str
    level: EducationLevel
    grade: int
    section: str


@dataclass(frozen=True)
class RosterSnapshot:
    """Students and classrooms of one level, loaded once per report job."""

    students: dict[str, Student] = field(default_factory=dict)
    classrooms: dict[str, Classroom] = field(default_factory=dict)
