from __future__ import annotations

import json
import logging
from pathlib import Path

from ..core.enums import EducationLevel
from ..core.exceptions import ValidationError
from .model import Classroom, RosterSnapshot, Student
from .repository import RosterRepository

logger = logging.getLogger(__name__)


class JsonFileRosterRepository(RosterRepository):
    """Roster exported to bulk storage as ``roster_{P|S}.json``.

    File shape::

        {"students": [{"student_id": "...", "classroom_id": "..."}],
         "classrooms": [{"classroom_id": "...", "grade": 3, "section": "A"}]}
    """

    def __init__(self, folder: str | Path):
        self._folder = Path(folder)

    def path_for(self, level: EducationLevel) -> Path:
        return self._folder / f"roster_{level.value}.json"

    def load(self, level: EducationLevel) -> RosterSnapshot:
        path = self.path_for(level)
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise ValidationError(f"Roster file not found: {path}")

        students = {
            str(s["student_id"]): Student(student_id=str(s["student_id"]), classroom_id=str(s["classroom_id"]))
            for s in data.get("students", [])
        }
        classrooms = {
            str(c["classroom_id"]): Classroom(
                classroom_id=str(c["classroom_id"]),
                level=level,
                grade=int(c["grade"]),
                section=str(c["section"]),
            )
            for c in data.get("classrooms", [])
        }
        logger.info("Roster %s loaded: %s students, %s classrooms", path.name, len(students), len(classrooms))
        return RosterSnapshot(students=students, classrooms=classrooms)
