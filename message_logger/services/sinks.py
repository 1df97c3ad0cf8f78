"""Output sinks plus the inline-markup and browser-console renderers."""

from __future__ import annotations

import dataclasses
import io
import sys
from typing import Any, Protocol, TextIO

from jinja2.utils import htmlsafe_json_dumps
from markupsafe import escape

from .severity import SeverityBucket, css_class, label

STYLES = """
<style>
    .error {
        background-color: #f8d7da;
        color: #721c24;
        border: 1px solid #f5c6cb;
        padding: 10px;
        margin: 10px;
    }

    .warning {
        background-color: #ffeeba;
        color: #856404;
        border: 1px solid #ffeeba;
        padding: 10px;
        margin: 10px;
    }

    .notice {
        background-color: #d1ecf1;
        color: #0c5460;
        border: 1px solid #bee5eb;
        padding: 10px;
        margin: 10px;
    }
</style>
"""


class OutputSink(Protocol):
    def write(self, text: str) -> None: ...

    def flush(self) -> None: ...


class StreamSink:
    """Write straight to a text stream (stdout unless told otherwise)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved at write time so a swapped sys.stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str) -> None:
        self.stream.write(text)

    def flush(self) -> None:
        self.stream.flush()


class BufferSink:
    """In-memory sink; ``getvalue()`` returns everything written so far."""

    def __init__(self) -> None:
        self._buffer = io.StringIO()
        self.flushes = 0

    def write(self, text: str) -> None:
        self._buffer.write(text)

    def flush(self) -> None:
        self.flushes += 1

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def clear(self) -> None:
        self._buffer = io.StringIO()


def _json_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return str(value)


def to_console_json(payload: Any) -> str:
    """Serialize ``payload`` so it is safe inside a ``<script>`` element."""
    return str(htmlsafe_json_dumps(payload, default=_json_default))


def console_statement(payload: Any, with_script_tags: bool = True) -> str:
    js_code = f"console.log({to_console_json(payload)});"
    if with_script_tags:
        js_code = f"<script>{js_code}</script>"
    return js_code


def console_log(sink: OutputSink, payload: Any, with_script_tags: bool = True) -> None:
    """Emit a ``console.log(...)`` statement for ``payload`` and flush at once."""
    sink.write(console_statement(payload, with_script_tags))
    sink.flush()


def render_inline(
    sink: OutputSink,
    bucket: SeverityBucket,
    code: int,
    message: str,
    file: str,
    line: int,
) -> None:
    """Write a styled error block for one event to ``sink``."""
    if bucket is SeverityBucket.UNKNOWN:
        heading = f"{label(bucket)} [{code}] {escape(message)}<br>"
    else:
        heading = f"<strong>{label(bucket)}</strong> [{code}] {escape(message)}<br>"
    sink.write(STYLES)
    sink.write(f"<div class='{css_class(bucket)}'>")
    sink.write(heading)
    sink.write(f"File: {escape(file)}<br>")
    sink.write(f"Line: {line}<br>")
    sink.write("</div>")
    sink.flush()
