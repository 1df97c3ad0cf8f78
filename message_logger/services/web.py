"""Flask wiring for the error router: per-request capture and response injection."""

from __future__ import annotations

from flask import Flask, Response, g, has_request_context, request
from werkzeug.exceptions import HTTPException

from .errors import record_exception
from .hooks import ErrorHook, code_for_exception, exception_location
from .router import ErrorEvent, ErrorRouter, SourceLocation
from .sinks import OutputSink, StreamSink

_CAPTURE_KEY = "_message_logger_output"

ERROR_PAGE = "<!doctype html><html><head><title>Internal Server Error</title></head><body><h1>Internal Server Error</h1></body></html>"


class ResponseSink:
    """Buffer output in ``flask.g`` during a request; fall back to a stream outside one."""

    def __init__(self, fallback: OutputSink | None = None) -> None:
        self.fallback = fallback if fallback is not None else StreamSink()

    def write(self, text: str) -> None:
        if has_request_context():
            g.setdefault(_CAPTURE_KEY, []).append(text)
        else:
            self.fallback.write(text)

    def flush(self) -> None:
        # Request output is flushed into the response by the after_request hook.
        if not has_request_context():
            self.fallback.flush()

    def pop_captured(self) -> str:
        if not has_request_context():
            return ""
        return "".join(g.pop(_CAPTURE_KEY, []))


def inject_output(body: str, output: str) -> str:
    idx = body.rfind("</body>")
    if idx == -1:
        return body + output
    return body[:idx] + output + body[idx:]


def register_console(app: Flask, hook: ErrorHook) -> ErrorRouter:
    """Build this app's error router and attach it to the Flask app instance.

    The render mode belongs to the returned router; the process-wide
    ``hook`` is shared, and the most recently created app owns it.
    """
    sink = ResponseSink()
    router = ErrorRouter(sink=sink, hook=hook)
    router.set_log_to_console(bool(app.config.get("MESSAGE_LOGGER_LOG_TO_CONSOLE", False)))
    app.extensions["message_logger"] = router

    if app.config.get("MESSAGE_LOGGER_INSTALL_HOOKS", False):
        if not hook.active:
            # Drop installs whose adapters were swapped out from under us.
            hook.reset()
        elif hook.depth:
            hook.uninstall()
        router.install()

    @app.after_request
    def flush_captured_output(response: Response) -> Response:
        output = sink.pop_captured()
        if not output:
            return response
        if response.mimetype == "text/html" and not response.direct_passthrough and not response.is_streamed:
            response.set_data(inject_output(response.get_data(as_text=True), output))
        else:
            app.logger.info("Diagnostics for %s %s: %s", request.method, request.path, output)
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        file, line = exception_location(exc, exc.__traceback__)
        message = f"{type(exc).__name__}: {exc}"
        router.handle(ErrorEvent(int(code_for_exception(exc)), message, SourceLocation(file, line)))
        record_exception(f"{request.method} {request.path}", exc)
        return Response(ERROR_PAGE, status=500, mimetype="text/html")
