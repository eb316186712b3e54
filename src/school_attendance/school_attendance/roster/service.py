from __future__ import annotations

from typing import Iterable, Mapping, Union

from ..core.constants import ALL_SELECTOR, PRIMARY_GRADES, SECONDARY_GRADES
from ..core.enums import EducationLevel
from .model import Classroom, Student

GradeSelector = Union[int, str]


def select_classrooms(classrooms: Iterable[Classroom], *, grade: GradeSelector, section: str) -> list[Classroom]:
    """Keep classrooms matching grade and section; ``"T"`` selects all."""

    selected = []
    for c in classrooms:
        if grade != ALL_SELECTOR and c.grade != grade:
            continue
        if section != ALL_SELECTOR and c.section != section:
            continue
        selected.append(c)
    return selected


def grades_for(level: EducationLevel, grade: GradeSelector) -> list[int]:
    if grade != ALL_SELECTOR:
        return [int(grade)]
    return list(PRIMARY_GRADES if level == EducationLevel.PRIMARY else SECONDARY_GRADES)


def students_by_classroom(students: Mapping[str, Student]) -> dict[str, set[str]]:
    members: dict[str, set[str]] = {}
    for student_id, student in students.items():
        members.setdefault(student.classroom_id, set()).add(student_id)
    return members
