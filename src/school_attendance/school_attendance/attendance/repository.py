from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import EducationLevel
from .model import MonthlyAttendanceRecord


class MonthlyAttendanceRepository(Protocol):
    def get_for_months(self, level: EducationLevel, grade: int, months: Sequence[int]) -> Sequence[MonthlyAttendanceRecord]:
        raise NotImplementedError
