from __future__ import annotations

import logging

from ..core.constants import DEFAULT_LATE_TOLERANCE_MINUTES
from ..core.enums import EducationLevel
from ..reports.repository import SettingsRepository

logger = logging.getLogger(__name__)


class LateToleranceService:
    """Late tolerance per level, shared by report jobs and the live endpoint."""

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def tolerance_seconds(self, level: EducationLevel) -> int:
        minutes = self._settings.get_late_tolerance_minutes(level)
        if minutes is None or minutes < 0:
            logger.warning("No late tolerance configured for %s, using %s min", level.value, DEFAULT_LATE_TOLERANCE_MINUTES)
            minutes = DEFAULT_LATE_TOLERANCE_MINUTES
        return int(minutes) * 60
