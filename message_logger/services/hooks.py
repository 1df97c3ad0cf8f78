"""Process-wide error hook built on ``warnings.showwarning`` and ``sys.excepthook``.

Warnings issued while a handler is installed are routed to it with an
:class:`ErrorCode` derived from their category; uncaught exceptions are routed
as fatal codes. Installs stack, so ``uninstall`` always restores whatever was
active before the matching ``install``.
"""

from __future__ import annotations

import sys
import traceback
import warnings
from contextlib import contextmanager
from types import TracebackType
from typing import Callable, Iterator, NamedTuple

from .severity import ErrorCode

ErrorHandler = Callable[[int, str, str, int], None]


class Notice(Warning):
    """Informational runtime message, classified as a notice."""


class UserNotice(Notice, UserWarning):
    """Notice raised from application code via :func:`trigger_error`."""


class UserError(UserWarning):
    """Non-terminating error raised from application code via :func:`trigger_error`."""


class UserDeprecation(DeprecationWarning):
    """Deprecation notice raised from application code via :func:`trigger_error`."""


# Most specific categories first; the first match along the MRO wins.
CATEGORY_CODES: dict[type[Warning], ErrorCode] = {
    UserError: ErrorCode.USER_ERROR,
    UserNotice: ErrorCode.USER_NOTICE,
    UserDeprecation: ErrorCode.USER_DEPRECATED,
    Notice: ErrorCode.NOTICE,
    UserWarning: ErrorCode.USER_WARNING,
    SyntaxWarning: ErrorCode.COMPILE_WARNING,
    ImportWarning: ErrorCode.CORE_WARNING,
    DeprecationWarning: ErrorCode.DEPRECATED,
    PendingDeprecationWarning: ErrorCode.DEPRECATED,
    FutureWarning: ErrorCode.USER_DEPRECATED,
    Warning: ErrorCode.WARNING,
}

TRIGGER_CATEGORIES: dict[ErrorCode, type[Warning]] = {
    ErrorCode.USER_ERROR: UserError,
    ErrorCode.USER_WARNING: UserWarning,
    ErrorCode.USER_NOTICE: UserNotice,
    ErrorCode.USER_DEPRECATED: UserDeprecation,
}


def code_for_warning(category: type[Warning]) -> ErrorCode:
    for klass in category.__mro__:
        code = CATEGORY_CODES.get(klass)
        if code is not None:
            return code
    return ErrorCode.WARNING


def code_for_exception(exc: BaseException) -> ErrorCode:
    if isinstance(exc, SyntaxError):
        return ErrorCode.PARSE
    return ErrorCode.ERROR


def exception_location(exc: BaseException, tb: TracebackType | None) -> tuple[str, int]:
    """Return (file, line) of the innermost frame that raised ``exc``."""
    if isinstance(exc, SyntaxError) and exc.filename:
        return exc.filename, exc.lineno or 0
    frames = traceback.extract_tb(tb) if tb is not None else []
    if not frames:
        return "<unknown>", 0
    last = frames[-1]
    return last.filename, last.lineno or 0


def trigger_error(message: str, code: int = ErrorCode.USER_NOTICE) -> None:
    """Raise a user-level runtime message through the normal warnings path."""
    try:
        category = TRIGGER_CATEGORIES[ErrorCode(code)]
    except (KeyError, ValueError):
        raise ValueError(f"trigger_error only accepts user codes, got {code!r}") from None
    warnings.warn(message, category, stacklevel=2)


class _Installed(NamedTuple):
    showwarning: Callable[..., None]
    excepthook: Callable[..., None]
    previous_showwarning: Callable[..., None]
    previous_excepthook: Callable[..., None]


class ErrorHook:
    """Capability object owning installation of error handlers.

    Each install remembers the adapters it put in place, so the hook can
    tell whether it is still the active handler after other code (for
    example ``warnings.catch_warnings``) swapped the globals back.
    """

    def __init__(self) -> None:
        self._installed: list[_Installed] = []

    @property
    def depth(self) -> int:
        return len(self._installed)

    @property
    def active(self) -> bool:
        if not self._installed:
            return False
        top = self._installed[-1]
        return warnings.showwarning is top.showwarning and sys.excepthook is top.excepthook

    def install(self, handler: ErrorHandler) -> None:
        def showwarning(message, category, filename, lineno, file=None, line=None):
            handler(int(code_for_warning(category)), str(message), str(filename), int(lineno or 0))

        def excepthook(exc_type, exc_value, tb):
            file, line = exception_location(exc_value, tb)
            text = "".join(traceback.format_exception_only(exc_type, exc_value)).strip()
            handler(int(code_for_exception(exc_value)), text, file, line)

        self._installed.append(_Installed(showwarning, excepthook, warnings.showwarning, sys.excepthook))
        warnings.showwarning = showwarning
        sys.excepthook = excepthook

    def uninstall(self) -> None:
        if not self._installed:
            return
        entry = self._installed.pop()
        # Globals already replaced by someone else are left alone.
        if warnings.showwarning is entry.showwarning:
            warnings.showwarning = entry.previous_showwarning
        if sys.excepthook is entry.excepthook:
            sys.excepthook = entry.previous_excepthook

    def reset(self) -> None:
        """Undo every install still on the stack."""
        while self._installed:
            self.uninstall()

    @contextmanager
    def installed(self, handler: ErrorHandler) -> Iterator["ErrorHook"]:
        self.install(handler)
        try:
            yield self
        finally:
            self.uninstall()
