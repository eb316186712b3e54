from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import EducationLevel, ReportJobStatus
from .params import ReportJobPayload


class ReportJobRepository(Protocol):
    def register(self, payload: ReportJobPayload) -> None:
        """Record the job as PENDING (re-running a key resets it to PENDING)."""

        raise NotImplementedError

    def update_status(self, report_key: str, status: ReportJobStatus, artifact_id: Optional[str] = None) -> bool:
        raise NotImplementedError


class SettingsRepository(Protocol):
    def get_late_tolerance_minutes(self, level: EducationLevel) -> Optional[int]:
        raise NotImplementedError
