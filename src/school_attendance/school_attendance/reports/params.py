from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Union

from ..attendance.model import TimeRange
from ..common.validators import require_int_in_range, require_non_empty
from ..core.constants import ALL_SELECTOR
from ..core.enums import EducationLevel, ReportGranularity
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ClassroomSelection:
    level: EducationLevel
    grade: Union[int, str]
    section: str


@dataclass(frozen=True)
class ReportJobPayload:
    report_key: str
    granularity: ReportGranularity
    time_range: TimeRange
    selection: ClassroomSelection
    requested_by: Optional[str] = None


def _optional_day(data: dict, name: str) -> Optional[int]:
    value = data.get(name)
    if value is None:
        return None
    return require_int_in_range(value, name, 1, 31)


def _parse_time_range(data: dict) -> TimeRange:
    from_month = require_int_in_range(data.get("from_month"), "from_month", 1, 12)
    to_month = require_int_in_range(data.get("to_month"), "to_month", 1, 12)
    if from_month > to_month:
        raise ValidationError("from_month must not be after to_month")

    from_day = _optional_day(data, "from_day")
    to_day = _optional_day(data, "to_day")
    if (from_day is None) != (to_day is None):
        raise ValidationError("from_day and to_day must be given together")
    if from_day is not None and from_month == to_month and from_day > to_day:
        raise ValidationError("from_day must not be after to_day")
    return TimeRange(from_month=from_month, to_month=to_month, from_day=from_day, to_day=to_day)


def _parse_selection(data: dict) -> ClassroomSelection:
    try:
        level = EducationLevel(data.get("level"))
    except ValueError:
        raise ValidationError("level must be 'P' or 'S'")

    grade = data.get("grade", ALL_SELECTOR)
    if grade != ALL_SELECTOR:
        grade = require_int_in_range(grade, "grade", 1, 6 if level == EducationLevel.PRIMARY else 5)

    section = data.get("section", ALL_SELECTOR)
    section = require_non_empty(section, "section").upper()
    return ClassroomSelection(level=level, grade=grade, section=section)


def parse_report_payload(text: str) -> ReportJobPayload:
    """Decode the single JSON argument of the report job."""

    try:
        data = json.loads(text)
    except ValueError:
        raise ValidationError("Payload is not valid JSON")
    if not isinstance(data, dict):
        raise ValidationError("Payload must be a JSON object")

    report_key = require_non_empty(data.get("report_key"), "report_key")
    try:
        granularity = ReportGranularity(data.get("report_type"))
    except ValueError:
        raise ValidationError("report_type must be BY_DAY or BY_MONTH")

    requested_by: Any = data.get("requested_by")
    return ReportJobPayload(
        report_key=report_key,
        granularity=granularity,
        time_range=_parse_time_range(data),
        selection=_parse_selection(data),
        requested_by=str(requested_by) if requested_by is not None else None,
    )


def recover_report_key(text: str) -> Optional[str]:
    """Best effort: the report key of a payload that failed validation."""

    try:
        data = json.loads(text)
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("report_key"), str) and data["report_key"].strip():
        return data["report_key"].strip()
    return None
