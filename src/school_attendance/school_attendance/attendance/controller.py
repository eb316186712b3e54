from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..core.enums import EducationLevel
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _parse_query():
        try:
            level = EducationLevel((request.args.get("level") or "").upper())
        except ValueError:
            raise ValidationError("level must be 'P' or 'S'")

        try:
            grade = int(request.args.get("grade") or "")
        except ValueError:
            raise ValidationError("grade must be an integer")

        date_s = request.args.get("date")
        try:
            day = parse_iso_date(date_s) if date_s else now_local().date()
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD")
        return level, grade, day

    @app.errorhandler(ValidationError)
    def validation_error(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    def attendance_today():
        level, grade, day = _parse_query()
        result = container.live_day_decoder.decode_current_day(level, grade, day)
        tolerance = container.late_tolerance.tolerance_seconds(level)
        return jsonify(
            {
                "date": day.isoformat(),
                "level": level.value,
                "grade": grade,
                "tolerance_seconds": tolerance,
                **result.to_dict(tolerance),
            }
        )
