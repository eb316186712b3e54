from __future__ import annotations

from typing import Sequence

from pymongo.database import Database

from ..core.enums import EducationLevel
from .model import MonthlyAttendanceRecord
from .repository import MonthlyAttendanceRepository


class MongoMonthlyAttendanceRepository(MonthlyAttendanceRepository):
    """Monthly records live in one collection per level and grade."""

    def __init__(self, db: Database):
        self._db = db

    @staticmethod
    def collection_name(level: EducationLevel, grade: int) -> str:
        return f"attendance_{level.value.lower()}_{int(grade)}"

    def get_for_months(self, level: EducationLevel, grade: int, months: Sequence[int]) -> Sequence[MonthlyAttendanceRecord]:
        if not months:
            return []
        cursor = self._db[self.collection_name(level, grade)].find(
            {"month": {"$in": [int(m) for m in months]}},
            {"_id": 0, "student_id": 1, "month": 1, "daily_attendances": 1},
        )
        return [
            MonthlyAttendanceRecord(
                student_id=str(doc["student_id"]),
                month=int(doc["month"]),
                daily_attendances_raw=doc.get("daily_attendances"),
            )
            for doc in cursor
        ]
