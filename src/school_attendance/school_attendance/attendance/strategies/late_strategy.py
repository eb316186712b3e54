from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceOutcome
from ..model import AttendanceMark
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, mark: Optional[AttendanceMark], tolerance_seconds: int) -> StatusDecision:
        return StatusDecision(outcome=AttendanceOutcome.LATE)
