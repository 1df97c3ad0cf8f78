"""Route intercepted runtime errors to inline markup or the browser console."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from .errors import record_exception
from .hooks import ErrorHook
from .severity import classify
from .sinks import OutputSink, StreamSink, console_log, render_inline

log = logging.getLogger(__name__)


class RenderMode(Enum):
    INLINE_MARKUP = "inline"
    REMOTE_CONSOLE = "console"


@dataclass(frozen=True)
class SourceLocation:
    file: str
    line: int


@dataclass(frozen=True)
class ErrorEvent:
    code: int
    message: str
    location: SourceLocation

    def as_console_payload(self) -> dict[str, Any]:
        return {
            "errno": self.code,
            "errstr": self.message,
            "errfile": self.location.file,
            "errline": self.location.line,
        }


class ErrorRouter:
    """Holds the render mode and dispatches each error event to one sink path.

    One router is created per process (see ``message_logger.extensions``) and
    handed to whatever needs it. ``install``/``uninstall`` register the
    router with the host runtime through an :class:`ErrorHook`.
    """

    def __init__(
        self,
        sink: OutputSink | None = None,
        mode: RenderMode = RenderMode.INLINE_MARKUP,
        hook: ErrorHook | None = None,
    ) -> None:
        self.sink: OutputSink = sink if sink is not None else StreamSink()
        self.hook = hook if hook is not None else ErrorHook()
        self._mode = RenderMode.INLINE_MARKUP
        self.set_mode(mode)

    @property
    def mode(self) -> RenderMode:
        return self._mode

    def set_mode(self, mode: RenderMode) -> None:
        if not isinstance(mode, RenderMode):
            raise TypeError(f"mode must be a RenderMode, got {type(mode).__name__}")
        self._mode = mode

    @property
    def log_to_console(self) -> bool:
        return self._mode is RenderMode.REMOTE_CONSOLE

    def set_log_to_console(self, flag: bool) -> None:
        if not isinstance(flag, bool):
            raise TypeError(f"flag must be a bool, got {type(flag).__name__}")
        self.set_mode(RenderMode.REMOTE_CONSOLE if flag else RenderMode.INLINE_MARKUP)

    def handle(self, event: ErrorEvent) -> None:
        """Render one event in the current mode. Never raises."""
        mode = self._mode
        try:
            if mode is RenderMode.REMOTE_CONSOLE:
                console_log(self.sink, event.as_console_payload())
            else:
                render_inline(
                    self.sink,
                    classify(event.code),
                    event.code,
                    event.message,
                    event.location.file,
                    event.location.line,
                )
        except Exception as exc:
            log.warning("Failed to render error event %r: %s", event, exc)
            record_exception("message_logger.render", exc)
            self._write_fallback(event)

    def _write_fallback(self, event: ErrorEvent) -> None:
        text = (
            f"Unrenderable error [{event.code}]: {event.message} "
            f"in {event.location.file} on line {event.location.line}\n"
        )
        try:
            self.sink.write(text)
            self.sink.flush()
        except Exception:
            log.exception("Fallback error output failed")

    def __call__(self, code: int, message: str, file: str, line: int) -> None:
        self.handle(ErrorEvent(code, message, SourceLocation(file, line)))

    def render_error(self, code: int, message: str, file: str, line: int) -> None:
        render_inline(self.sink, classify(code), code, message, file, line)

    def log_error_to_console(self, code: int, message: str, file: str, line: int) -> None:
        event = ErrorEvent(code, message, SourceLocation(file, line))
        console_log(self.sink, event.as_console_payload())

    def console_log(self, payload: Any, with_script_tags: bool = True) -> None:
        console_log(self.sink, payload, with_script_tags)

    def log_raw_sql(self, result: Any, sql: str, code_line: str = "", variable_name: str = "") -> None:
        """Echo ``sql`` to the console unless the query reported failure."""
        if result is False:
            return
        variable = variable_name or " "
        self.console_log(f"SQL in raw ${variable} at {code_line}: {sql}")

    def install(self) -> None:
        self.hook.install(self)

    def uninstall(self) -> None:
        self.hook.uninstall()

    @contextmanager
    def installed(self) -> Iterator["ErrorRouter"]:
        with self.hook.installed(self):
            yield self
