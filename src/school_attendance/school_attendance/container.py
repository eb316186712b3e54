from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import redis
from pymongo import MongoClient

from .attendance.live_service import LiveDayDecoder
from .attendance.mongo_attendance_repository import MongoMonthlyAttendanceRepository
from .attendance.redis_live_repository import RedisLiveAttendanceStore
from .attendance.tolerance import LateToleranceService
from .core.constants import DEFAULT_LIVE_FETCH_WORKERS
from .core.enums import EducationLevel
from .database.bootstrap import db_config_from_dict
from .database.connection import DatabaseConnection
from .database.stores import mongo_config_from_dict, open_mongo, open_redis, redis_config_from_dict
from .reports.mysql_report_repository import MySQLReportJobRepository, MySQLSettingsRepository
from .reports.service import ReportJobService
from .reports.sink import LocalFolderReportSink
from .roster.json_roster_repository import JsonFileRosterRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    mongo_client: MongoClient
    redis_clients: dict[EducationLevel, redis.Redis]

    report_jobs_repo: MySQLReportJobRepository
    settings_repo: MySQLSettingsRepository
    roster_repo: JsonFileRosterRepository
    monthly_attendance_repo: MongoMonthlyAttendanceRepository

    late_tolerance: LateToleranceService
    live_day_decoder: LiveDayDecoder
    report_job_service: ReportJobService

    def close(self) -> None:
        """Release store handles; safe to call on any exit path."""
        for level, client in self.redis_clients.items():
            try:
                client.close()
            except redis.RedisError:
                logger.exception("Error closing Redis client for %s", level.value)
        self.mongo_client.close()
        logger.info("Connections closed")

    def __enter__(self) -> "Container":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def build_container(
    *,
    db_config: dict,
    mongo_config: dict,
    redis_config: dict,
    roster_dir: str | Path,
    reports_dir: str | Path,
    live_fetch_workers: int = DEFAULT_LIVE_FETCH_WORKERS,
) -> Container:
    conn = DatabaseConnection.get_instance(db_config_from_dict(db_config))
    mongo_client, mongo_db = open_mongo(mongo_config_from_dict(mongo_config))
    redis_cfg = redis_config_from_dict(redis_config)
    redis_clients = {
        EducationLevel.PRIMARY: open_redis(redis_cfg, db=redis_cfg.primary_db),
        EducationLevel.SECONDARY: open_redis(redis_cfg, db=redis_cfg.secondary_db),
    }

    report_jobs_repo = MySQLReportJobRepository(conn)
    settings_repo = MySQLSettingsRepository(conn)
    roster_repo = JsonFileRosterRepository(roster_dir)
    monthly_attendance_repo = MongoMonthlyAttendanceRepository(mongo_db)
    late_tolerance = LateToleranceService(settings_repo)

    live_day_decoder = LiveDayDecoder(
        {level: RedisLiveAttendanceStore(client) for level, client in redis_clients.items()},
        max_workers=live_fetch_workers,
    )
    report_job_service = ReportJobService(
        report_jobs_repo,
        settings_repo,
        roster_repo,
        monthly_attendance_repo,
        LocalFolderReportSink(reports_dir),
    )

    return Container(
        conn=conn,
        mongo_client=mongo_client,
        redis_clients=redis_clients,
        report_jobs_repo=report_jobs_repo,
        settings_repo=settings_repo,
        roster_repo=roster_repo,
        monthly_attendance_repo=monthly_attendance_repo,
        late_tolerance=late_tolerance,
        live_day_decoder=live_day_decoder,
        report_job_service=report_job_service,
    )


def build_container_from_settings(settings) -> Container:
    return build_container(
        db_config=getattr(settings, "DB_CONFIG"),
        mongo_config=getattr(settings, "MONGO_CONFIG"),
        redis_config=getattr(settings, "REDIS_CONFIG"),
        roster_dir=getattr(settings, "ROSTER_DIR"),
        reports_dir=getattr(settings, "REPORTS_DIR"),
        live_fetch_workers=int(getattr(settings, "LIVE_FETCH_WORKERS", DEFAULT_LIVE_FETCH_WORKERS)),
    )
