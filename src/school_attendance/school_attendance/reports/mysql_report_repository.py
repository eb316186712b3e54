from __future__ import annotations

from typing import Optional

from ..common.validators import parse_int
from ..core.enums import EducationLevel, ReportJobStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .params import ReportJobPayload
from .repository import ReportJobRepository, SettingsRepository


class MySQLReportJobRepository(ReportJobRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def register(self, payload: ReportJobPayload) -> None:
        r = payload.time_range
        sel = payload.selection
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO report_jobs(
                    report_key, report_type, level, grade, section,
                    from_month, to_month, from_day, to_day, requested_by, status, artifact_id
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,NULL)
                ON DUPLICATE KEY UPDATE status=VALUES(status), artifact_id=NULL
                """,
                (
                    payload.report_key,
                    payload.granularity.value,
                    sel.level.value,
                    str(sel.grade),
                    sel.section,
                    r.from_month,
                    r.to_month,
                    r.from_day,
                    r.to_day,
                    payload.requested_by,
                    ReportJobStatus.PENDING.value,
                ),
            )

    def update_status(self, report_key: str, status: ReportJobStatus, artifact_id: Optional[str] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE report_jobs SET status=%s, artifact_id=%s WHERE report_key=%s",
                (status.value, artifact_id, report_key),
            )
            return cur.rowcount > 0


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_late_tolerance_minutes(self, level: EducationLevel) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT value FROM general_settings WHERE name=%s",
                (f"LATE_TOLERANCE_MINUTES_{level.value}",),
            )
            r = fetchone(cur)
            if not r:
                return None
            return parse_int(r["value"])
