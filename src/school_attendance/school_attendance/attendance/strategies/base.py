from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceOutcome
from ..model import AttendanceMark


@dataclass(frozen=True)
class StatusDecision:
    outcome: AttendanceOutcome


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance outcome."""

    @abstractmethod
    def decide_checkin(self, *, mark: Optional[AttendanceMark], tolerance_seconds: int) -> StatusDecision:
        raise NotImplementedError
