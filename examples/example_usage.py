"""Example: decode today's live attendance through the service layer (no Flask)."""

import importlib
from datetime import date

from dotenv import load_dotenv

from config import get_settings_module

from src.school_attendance.school_attendance.container import build_container_from_settings
from src.school_attendance.school_attendance.core.enums import EducationLevel


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    with build_container_from_settings(settings) as container:
        result = container.live_day_decoder.decode_current_day(EducationLevel.PRIMARY, 3, date.today())
        tolerance = container.late_tolerance.tolerance_seconds(EducationLevel.PRIMARY)
        print(result.to_dict(tolerance))


if __name__ == "__main__":
    main()
