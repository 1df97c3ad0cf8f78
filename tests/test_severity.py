import pytest

from message_logger.services.severity import (
    ErrorCode,
    SeverityBucket,
    classify,
    css_class,
    label,
)


@pytest.mark.parametrize(
    "code",
    [ErrorCode.ERROR, ErrorCode.PARSE, ErrorCode.CORE_ERROR, ErrorCode.COMPILE_ERROR, ErrorCode.USER_ERROR],
)
def test_fatal_codes(code):
    assert classify(code) is SeverityBucket.FATAL


@pytest.mark.parametrize(
    "code",
    [ErrorCode.WARNING, ErrorCode.CORE_WARNING, ErrorCode.COMPILE_WARNING, ErrorCode.USER_WARNING],
)
def test_warning_codes(code):
    assert classify(code) is SeverityBucket.WARNING


@pytest.mark.parametrize("code", [ErrorCode.NOTICE, ErrorCode.USER_NOTICE])
def test_notice_codes(code):
    assert classify(code) is SeverityBucket.NOTICE


@pytest.mark.parametrize(
    "code",
    [
        ErrorCode.STRICT,
        ErrorCode.RECOVERABLE_ERROR,
        ErrorCode.DEPRECATED,
        ErrorCode.USER_DEPRECATED,
        0,
        -1,
        3,
        2**40,
    ],
)
def test_everything_else_is_unknown(code):
    assert classify(code) is SeverityBucket.UNKNOWN


def test_plain_ints_classify_like_enum_members():
    assert classify(1) is SeverityBucket.FATAL
    assert classify(512) is SeverityBucket.WARNING
    assert classify(1024) is SeverityBucket.NOTICE


def test_presentation_table():
    assert [css_class(b) for b in SeverityBucket] == ["error", "warning", "notice", ""]
    assert [label(b) for b in SeverityBucket] == ["Error:", "Warning:", "Notice:", "Unknown error type:"]
