from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from typing import Mapping

from ..common.datetime_utils import format_iso_date
from ..core.constants import DEFAULT_LIVE_FETCH_WORKERS, LIVE_KEY_SEPARATOR
from ..core.enums import EducationLevel, SkipReason
from ..core.exceptions import StoreUnavailableError, ValidationError
from .factory import classify_checkin
from .live_key import LiveAttendanceKey, ValueParseResult, parse_live_key, parse_live_value
from .live_repository import LiveAttendanceStore
from .model import DailyAttendance

logger = logging.getLogger(__name__)


@dataclass
class LiveDayResult:
    """Decoded same-day attendance.

    ``available`` is False when the store could not be read; ``attendances`` is
    then empty and must not be read as "nobody checked in today".
    """

    attendances: dict[str, DailyAttendance] = field(default_factory=dict)
    skipped: Counter = field(default_factory=Counter)
    available: bool = True

    @property
    def check_in_count(self) -> int:
        return sum(1 for a in self.attendances.values() if a.check_in is not None)

    @property
    def check_out_count(self) -> int:
        return sum(1 for a in self.attendances.values() if a.check_out is not None)

    def to_dict(self, tolerance_seconds: int | None = None) -> dict:
        """Serialise for the API.

        With ``tolerance_seconds`` each student also gets an ``outcome``. It is
        ``None`` while no check-in key has been read for the student.
        """
        students = {}
        for student_id, attendance in self.attendances.items():
            entry = attendance.to_dict()
            if tolerance_seconds is not None:
                entry["outcome"] = (
                    classify_checkin(attendance, tolerance_seconds).value if attendance.check_in is not None else None
                )
            students[student_id] = entry
        return {
            "available": self.available,
            "students": students,
            "skipped": {reason.value: n for reason, n in self.skipped.items()},
        }


class LiveDayDecoder:
    def __init__(
        self,
        stores: Mapping[EducationLevel, LiveAttendanceStore],
        *,
        max_workers: int = DEFAULT_LIVE_FETCH_WORKERS,
    ):
        self._stores = dict(stores)
        self._max_workers = max(1, int(max_workers))

    def decode_current_day(self, level: EducationLevel, grade: int, day: date) -> LiveDayResult:
        store = self._stores.get(level)
        if store is None:
            raise ValidationError(f"No live store configured for level {level.value}")

        logger.info("Reading live attendance for level=%s grade=%s date=%s", level.value, grade, day)
        try:
            return self._decode(store, level, grade, day)
        except Exception:
            logger.exception("Live attendance store failed for level=%s grade=%s", level.value, grade)
            return LiveDayResult(available=False)

    def _decode(self, store: LiveAttendanceStore, level: EducationLevel, grade: int, day: date) -> LiveDayResult:
        result = LiveDayResult()

        raw_keys = store.keys_matching(f"{format_iso_date(day)}{LIVE_KEY_SEPARATOR}*")
        keys: list[LiveAttendanceKey] = []
        for raw in raw_keys:
            parsed = parse_live_key(raw)
            if not parsed.ok:
                result.skipped[parsed.skip_reason] += 1
            elif not parsed.key.matches(level=level, grade=grade, day=day):
                result.skipped[SkipReason.OUT_OF_SCOPE] += 1
            else:
                keys.append(parsed.key)

        logger.info("%s keys scanned, %s in scope", len(raw_keys), len(keys))
        if not keys:
            return result

        def fetch(key: LiveAttendanceKey) -> ValueParseResult:
            # A failed read skips this key only; scan failures still abort the call.
            try:
                raw_value = store.get(key.raw)
            except StoreUnavailableError as e:
                logger.warning("Could not read live key %s: %s", key.raw, e)
                return ValueParseResult(skip_reason=SkipReason.FETCH_FAILED)
            return parse_live_value(raw_value)

        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(keys))) as pool:
            values = list(pool.map(fetch, keys))

        # Merge in enumeration order: last mark of a given mode wins.
        for key, value in zip(keys, values):
            if not value.ok:
                logger.warning("Skipping live key %s: %s", key.raw, value.skip_reason.value)
                result.skipped[value.skip_reason] += 1
                continue
            current = result.attendances.get(key.student_id, DailyAttendance())
            result.attendances[key.student_id] = current.with_mark(key.check_mode, value.mark)

        logger.info(
            "Decoded %s students: %s check-ins, %s check-outs",
            len(result.attendances),
            result.check_in_count,
            result.check_out_count,
        )
        return result
