from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.core.enums import EducationLevel


def test_build_container_wires_services_and_closes(tmp_path):
    container = build_container(
        db_config={"host": "localhost", "user": "root", "password": "", "database": "school_attendance_test"},
        mongo_config={"uri": "mongodb://localhost:27017", "database": "school_attendance_test", "timeout_ms": 100},
        redis_config={"host": "localhost", "port": 6379, "primary_db": 14, "secondary_db": 15},
        roster_dir=tmp_path / "roster",
        reports_dir=tmp_path / "reports",
        live_fetch_workers=2,
    )

    with container:
        assert set(container.redis_clients) == {EducationLevel.PRIMARY, EducationLevel.SECONDARY}
        assert container.roster_repo.path_for(EducationLevel.SECONDARY).name == "roster_S.json"
        assert container.report_job_service is not None
        assert container.live_day_decoder is not None
        assert container.late_tolerance is not None
