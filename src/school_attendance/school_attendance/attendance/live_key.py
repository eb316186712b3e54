"""Parsing of the live (same-day) key space.

Keys look like ``2025-08-29:E:E:P:3:A:77742971``::

    date : check mode : actor : level : grade : section : student id

Raw strings are parsed once here into :class:`LiveAttendanceKey`; nothing past
this module handles delimited keys. Values are ordered sequences whose first
element is the offset in seconds.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import format_iso_date
from ..common.validators import parse_int
from ..core.constants import LIVE_KEY_FIELD_COUNT, LIVE_KEY_SEPARATOR, STUDENT_ACTOR_CODE
from ..core.enums import CheckMode, EducationLevel, SkipReason
from .model import AttendanceMark


@dataclass(frozen=True)
class LiveAttendanceKey:
    day: str
    check_mode: CheckMode
    actor: str
    level_code: str
    grade: int
    section: str
    student_id: str
    raw: str = field(default="", compare=False)

    def matches(self, *, level: EducationLevel, grade: int, day: date) -> bool:
        return self.day == format_iso_date(day) and self.level_code == level.value and self.grade == grade


@dataclass(frozen=True)
class KeyParseResult:
    key: Optional[LiveAttendanceKey] = None
    skip_reason: Optional[SkipReason] = None

    @property
    def ok(self) -> bool:
        return self.key is not None


@dataclass(frozen=True)
class ValueParseResult:
    mark: Optional[AttendanceMark] = None
    skip_reason: Optional[SkipReason] = None

    @property
    def ok(self) -> bool:
        return self.mark is not None


def parse_live_key(raw: str | bytes) -> KeyParseResult:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    parts = raw.split(LIVE_KEY_SEPARATOR)
    if len(parts) != LIVE_KEY_FIELD_COUNT or not all(parts):
        return KeyParseResult(skip_reason=SkipReason.WRONG_FIELD_COUNT)

    day, mode, actor, level_code, grade_s, section, student_id = parts
    if actor != STUDENT_ACTOR_CODE:
        return KeyParseResult(skip_reason=SkipReason.NOT_A_STUDENT)

    grade = parse_int(grade_s)
    if grade is None:
        return KeyParseResult(skip_reason=SkipReason.INVALID_GRADE)

    try:
        check_mode = CheckMode(mode)
    except ValueError:
        return KeyParseResult(skip_reason=SkipReason.UNKNOWN_CHECK_MODE)

    return KeyParseResult(
        key=LiveAttendanceKey(
            day=day,
            check_mode=check_mode,
            actor=actor,
            level_code=level_code,
            grade=grade,
            section=section,
            student_id=student_id,
            raw=raw,
        )
    )


def parse_live_value(value: Any) -> ValueParseResult:
    if value is None:
        return ValueParseResult(skip_reason=SkipReason.MISSING_VALUE)

    # Redis hands back JSON text; other clients may already decode it.
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return ValueParseResult(skip_reason=SkipReason.NOT_A_SEQUENCE)

    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        return ValueParseResult(skip_reason=SkipReason.NOT_A_SEQUENCE)
    if len(value) == 0:
        return ValueParseResult(skip_reason=SkipReason.EMPTY_VALUE)

    offset = parse_int(value[0])
    if offset is None:
        return ValueParseResult(skip_reason=SkipReason.INVALID_OFFSET)
    return ValueParseResult(mark=AttendanceMark(offset_seconds=offset))
