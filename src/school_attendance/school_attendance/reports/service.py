from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from ..attendance.repository import MonthlyAttendanceRepository
from ..attendance.tolerance import LateToleranceService
from ..common.datetime_utils import epoch_millis, now_local
from ..core.constants import REPORTS_FOLDER
from ..core.enums import EducationLevel, ReportJobStatus
from ..roster.repository import RosterRepository
from ..roster.service import grades_for, select_classrooms
from .aggregator import ReportAggregator
from .model import AttendanceReport
from .params import ReportJobPayload
from .repository import ReportJobRepository, SettingsRepository
from .sink import ReportSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportJobResult:
    report_key: str
    artifact_id: str
    filename: str
    report: AttendanceReport


class ReportJobService:
    """Runs one report job: PENDING -> (AVAILABLE | ERROR)."""

    def __init__(
        self,
        jobs: ReportJobRepository,
        settings: SettingsRepository,
        roster: RosterRepository,
        attendance: MonthlyAttendanceRepository,
        sink: ReportSink,
        *,
        aggregator: ReportAggregator | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._jobs = jobs
        self._tolerance = LateToleranceService(settings)
        self._roster = roster
        self._attendance = attendance
        self._sink = sink
        self._aggregator = aggregator or ReportAggregator()
        self._clock = clock

    def tolerance_seconds(self, level: EducationLevel) -> int:
        return self._tolerance.tolerance_seconds(level)

    def run(self, payload: ReportJobPayload) -> ReportJobResult:
        self._jobs.register(payload)
        logger.info("Report %s registered as %s", payload.report_key, ReportJobStatus.PENDING.value)
        try:
            result = self._build_and_upload(payload)
        except Exception:
            self.mark_failed(payload.report_key)
            raise

        self._jobs.update_status(payload.report_key, ReportJobStatus.AVAILABLE, result.artifact_id)
        logger.info("Report %s available (artifact=%s)", payload.report_key, result.artifact_id)
        return result

    def mark_failed(self, report_key: str) -> None:
        try:
            updated = self._jobs.update_status(report_key, ReportJobStatus.ERROR)
        except Exception:
            logger.exception("Could not mark report %s as %s", report_key, ReportJobStatus.ERROR.value)
            return
        if not updated:
            logger.warning("Report %s has no job row; %s status not recorded", report_key, ReportJobStatus.ERROR.value)

    def _build_and_upload(self, payload: ReportJobPayload) -> ReportJobResult:
        selection = payload.selection
        time_range = payload.time_range

        tolerance = self.tolerance_seconds(selection.level)
        logger.info("Late tolerance for %s: %s s", selection.level.value, tolerance)

        roster = self._roster.load(selection.level)
        classrooms = select_classrooms(roster.classrooms.values(), grade=selection.grade, section=selection.section)
        logger.info("%s of %s classrooms match the selection", len(classrooms), len(roster.classrooms))

        months = time_range.months()
        records = []
        for grade in grades_for(selection.level, selection.grade):
            records.extend(self._attendance.get_for_months(selection.level, grade, months))
        logger.info("%s monthly records fetched for months %s", len(records), months)

        report = self._aggregator.aggregate(
            records,
            classrooms,
            roster.students,
            time_range,
            tolerance,
            payload.granularity,
        )

        filename = f"Report_{payload.report_key}_{epoch_millis(self._clock())}.json"
        artifact_id = self._sink.upload(report.to_dict(), REPORTS_FOLDER, filename)
        return ReportJobResult(report_key=payload.report_key, artifact_id=artifact_id, filename=filename, report=report)
