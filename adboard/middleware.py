"""
Request diagnostics for the board API.

Every HTTP response gets ``X-Response-Time-Ms`` and ``X-Query-Count``
headers, and one access-log line is written per request with the method,
path, status, duration and number of SQL statements.  Statements are
counted by an engine listener writing to a context variable that the
middleware resets when a request starts.
"""
import logging
import time
from contextvars import ContextVar

from sqlalchemy import event
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

query_count_var: ContextVar[int] = ContextVar("query_count", default=0)


def install_query_counter(engine) -> None:
    """Count every statement *engine* sends in ``query_count_var``."""

    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def _count_query(conn, cursor, statement, parameters, context, executemany):
        query_count_var.set(query_count_var.get() + 1)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class TimingMiddleware:
    # Plain ASGI rather than BaseHTTPMiddleware: the endpoint then runs in
    # this task, so its query_count_var updates are visible here.

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        query_count_var.set(0)
        start = time.perf_counter()
        status_code = 500

        async def send_with_diagnostics(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                message["headers"] = [
                    *message.get("headers", []),
                    (b"x-response-time-ms", str(_elapsed_ms(start)).encode()),
                    (b"x-query-count", str(query_count_var.get()).encode()),
                ]
            await send(message)

        try:
            await self.app(scope, receive, send_with_diagnostics)
        finally:
            logger.info(
                "%s %s -> %d (%.2f ms, %d queries)",
                scope["method"],
                scope["path"],
                status_code,
                _elapsed_ms(start),
                query_count_var.get(),
            )
