from __future__ import annotations

from enum import Enum


class EducationLevel(str, Enum):
    """Cấp học; value is the code used in live keys and roster files."""

    PRIMARY = "P"
    SECONDARY = "S"


class CheckMode(str, Enum):
    """Loại sự kiện điểm danh (vào / ra)."""

    CHECK_IN = "E"
    CHECK_OUT = "S"


class AttendanceOutcome(str, Enum):
    """Kết quả phân loại một ngày đi học của học sinh."""

    EARLY = "EARLY"
    LATE = "LATE"
    ABSENT = "ABSENT"


class ReportGranularity(str, Enum):
    BY_DAY = "BY_DAY"
    BY_MONTH = "BY_MONTH"


class ReportJobStatus(str, Enum):
    """Trạng thái job tạo báo cáo lưu trong CSDL."""

    PENDING = "PENDING"
    AVAILABLE = "AVAILABLE"
    ERROR = "ERROR"


class SkipReason(str, Enum):
    """Why a live key/value was left out of the decoded day."""

    WRONG_FIELD_COUNT = "WRONG_FIELD_COUNT"
    INVALID_GRADE = "INVALID_GRADE"
    NOT_A_STUDENT = "NOT_A_STUDENT"
    UNKNOWN_CHECK_MODE = "UNKNOWN_CHECK_MODE"
    OUT_OF_SCOPE = "OUT_OF_SCOPE"
    MISSING_VALUE = "MISSING_VALUE"
    NOT_A_SEQUENCE = "NOT_A_SEQUENCE"
    EMPTY_VALUE = "EMPTY_VALUE"
    INVALID_OFFSET = "INVALID_OFFSET"
    FETCH_FAILED = "FETCH_FAILED"
