from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceOutcome
from .model import AttendanceMark, DailyAttendance
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Only the check-in mark takes part: lateness and absence are defined by
    arrival. Check-out marks are carried in the model but never scored.
    """

    def for_checkin(self, *, mark: Optional[AttendanceMark], tolerance_seconds: int) -> AttendanceStrategy:
        if mark is None or mark.offset_seconds is None:
            return AbsentStrategy()
        if mark.offset_seconds > tolerance_seconds:
            return LateStrategy()
        return OnTimeStrategy()


_DEFAULT_FACTORY = AttendanceStrategyFactory()


def classify_checkin(
    day: Optional[DailyAttendance],
    tolerance_seconds: int,
    *,
    factory: AttendanceStrategyFactory | None = None,
) -> AttendanceOutcome:
    factory = factory or _DEFAULT_FACTORY
    mark = day.check_in if day else None
    strategy = factory.for_checkin(mark=mark, tolerance_seconds=tolerance_seconds)
    return strategy.decide_checkin(mark=mark, tolerance_seconds=tolerance_seconds).outcome
