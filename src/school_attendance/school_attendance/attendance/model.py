from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..core.constants import OFFSET_FIELD
from ..core.enums import CheckMode
from ..core.exceptions import MalformedRecordError


@dataclass(frozen=True)
class AttendanceMark:
    """One observed check event.

    ``offset_seconds`` is actual minus scheduled time; ``None`` means the
    producer recorded the mark without an offset (a no-show). Fractional
    offsets are kept as delivered so the tolerance comparison stays exact.
    """

    offset_seconds: Optional[float]

    def to_dict(self) -> dict:
        return {"offset_seconds": self.offset_seconds}


@dataclass(frozen=True)
class DailyAttendance:
    """Thực thể miền: điểm danh của một học sinh trong một ngày."""

    check_in: Optional[AttendanceMark] = None
    check_out: Optional[AttendanceMark] = None

    @property
    def has_data(self) -> bool:
        return self.check_in is not None or self.check_out is not None

    def with_mark(self, mode: CheckMode, mark: AttendanceMark) -> "DailyAttendance":
        if mode == CheckMode.CHECK_IN:
            return DailyAttendance(check_in=mark, check_out=self.check_out)
        return DailyAttendance(check_in=self.check_in, check_out=mark)

    def to_dict(self) -> dict:
        return {
            "check_in": self.check_in.to_dict() if self.check_in else None,
            "check_out": self.check_out.to_dict() if self.check_out else None,
        }


RawDailyAttendances = Optional[Union[str, bytes, Mapping[str, Any]]]


@dataclass(frozen=True)
class MonthlyAttendanceRecord:
    """Read-model of one student's month as stored by the historical store.

    The day mapping is kept as delivered (JSON text or decoded mapping) and is
    decoded by :func:`decode_daily_attendances` when the record is folded.
    """

    student_id: str
    month: int
    daily_attendances_raw: RawDailyAttendances

    def daily_attendances(self) -> dict[int, DailyAttendance]:
        return decode_daily_attendances(self.daily_attendances_raw)


def _decode_mark(detail: Any, *, day: str) -> Optional[AttendanceMark]:
    if detail is None:
        return None
    if not isinstance(detail, Mapping):
        raise MalformedRecordError(f"Day {day}: mark must be an object, got {type(detail).__name__}")
    offset = detail.get(OFFSET_FIELD)
    if offset is None:
        return AttendanceMark(offset_seconds=None)
    if isinstance(offset, bool) or not isinstance(offset, (int, float)):
        raise MalformedRecordError(f"Day {day}: {OFFSET_FIELD} must be a number, got {offset!r}")
    return AttendanceMark(offset_seconds=offset)


def decode_daily_attendances(raw: RawDailyAttendances) -> dict[int, DailyAttendance]:
    """Decode ``{"<day>": {"E": {...}, "S": {...}}}`` into typed day records.

    Raises MalformedRecordError when the payload is not the agreed shape.
    """

    if isinstance(raw, (str, bytes)):
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise MalformedRecordError(f"Daily attendances are not valid JSON: {e}") from e
    else:
        payload = raw

    if not isinstance(payload, Mapping):
        raise MalformedRecordError(f"Daily attendances must be an object, got {type(payload).__name__}")

    days: dict[int, DailyAttendance] = {}
    for day_key, detail in payload.items():
        try:
            day = int(day_key)
        except (TypeError, ValueError):
            raise MalformedRecordError(f"Invalid day key: {day_key!r}")
        if detail is None:
            days[day] = DailyAttendance()
            continue
        if not isinstance(detail, Mapping):
            raise MalformedRecordError(f"Day {day_key}: entry must be an object")
        days[day] = DailyAttendance(
            check_in=_decode_mark(detail.get(CheckMode.CHECK_IN.value), day=str(day_key)),
            check_out=_decode_mark(detail.get(CheckMode.CHECK_OUT.value), day=str(day_key)),
        )
    return days


@dataclass(frozen=True)
class TimeRange:
    """Inclusive month range; day bounds only restrict the boundary months."""

    from_month: int
    to_month: int
    from_day: Optional[int] = None
    to_day: Optional[int] = None

    @property
    def has_day_bounds(self) -> bool:
        return self.from_day is not None and self.to_day is not None

    def months(self) -> list[int]:
        return list(range(self.from_month, self.to_month + 1))

    def includes(self, *, month: int, day: int) -> bool:
        if not self.has_day_bounds:
            return True
        if month == self.from_month and day < self.from_day:
            return False
        if month == self.to_month and day > self.to_day:
            return False
        return True
