"""Runtime error codes and their severity buckets."""

from __future__ import annotations

from enum import Enum, IntEnum


class ErrorCode(IntEnum):
    """Error codes raised by the host runtime (numeric values are stable)."""

    ERROR = 1
    WARNING = 2
    PARSE = 4
    NOTICE = 8
    CORE_ERROR = 16
    CORE_WARNING = 32
    COMPILE_ERROR = 64
    COMPILE_WARNING = 128
    USER_ERROR = 256
    USER_WARNING = 512
    USER_NOTICE = 1024
    STRICT = 2048
    RECOVERABLE_ERROR = 4096
    DEPRECATED = 8192
    USER_DEPRECATED = 16384


class SeverityBucket(Enum):
    FATAL = "fatal"
    WARNING = "warning"
    NOTICE = "notice"
    UNKNOWN = "unknown"


FATAL_CODES = frozenset(
    {
        ErrorCode.ERROR,
        ErrorCode.PARSE,
        ErrorCode.CORE_ERROR,
        ErrorCode.COMPILE_ERROR,
        ErrorCode.USER_ERROR,
    }
)
WARNING_CODES = frozenset(
    {
        ErrorCode.WARNING,
        ErrorCode.CORE_WARNING,
        ErrorCode.COMPILE_WARNING,
        ErrorCode.USER_WARNING,
    }
)
NOTICE_CODES = frozenset({ErrorCode.NOTICE, ErrorCode.USER_NOTICE})

CSS_CLASSES: dict[SeverityBucket, str] = {
    SeverityBucket.FATAL: "error",
    SeverityBucket.WARNING: "warning",
    SeverityBucket.NOTICE: "notice",
    SeverityBucket.UNKNOWN: "",
}

LABELS: dict[SeverityBucket, str] = {
    SeverityBucket.FATAL: "Error:",
    SeverityBucket.WARNING: "Warning:",
    SeverityBucket.NOTICE: "Notice:",
    SeverityBucket.UNKNOWN: "Unknown error type:",
}


def classify(code: int) -> SeverityBucket:
    """Map a raw error code to its severity bucket.

    Total over all integers: codes outside the three known groups are
    ``UNKNOWN``. Fatal codes are checked first.
    """
    if code in FATAL_CODES:
        return SeverityBucket.FATAL
    if code in WARNING_CODES:
        return SeverityBucket.WARNING
    if code in NOTICE_CODES:
        return SeverityBucket.NOTICE
    return SeverityBucket.UNKNOWN


def css_class(bucket: SeverityBucket) -> str:
    return CSS_CLASSES.get(bucket, "")


def label(bucket: SeverityBucket) -> str:
    return LABELS.get(bucket, LABELS[SeverityBucket.UNKNOWN])
