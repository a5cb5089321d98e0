"""ASGI middleware for request context and timing."""

from __future__ import annotations

import logging
import time
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.logger import bind_contextvars, clear_contextvars

logger = logging.getLogger(__name__)


class RequestContextMiddleware:
    """Binds a request_id to every log line and emits one line per request.

    Adds ``x-request-id`` and ``x-request-duration-ms`` response headers so a
    caller can correlate a failed issuance with the logged error.

    Unhandled exceptions are answered by the 500 handler in Starlette's
    ServerErrorMiddleware, which wraps this middleware, so those responses
    carry no request headers. The completion line still records status 500.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")
        request_id = str(uuid.uuid4())

        clear_contextvars()
        bind_contextvars(request_id=request_id, http_method=method, http_path=path)

        response_status: int | None = None

        async def send_wrapper(message: Message) -> None:
            nonlocal response_status

            if message.get("type") == "http.response.start":
                response_status = int(message.get("status", 0))
                headers: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                duration_ms = (time.perf_counter() - start_time) * 1000
                headers.append(
                    (b"x-request-duration-ms", f"{duration_ms:.2f}".encode())
                )
                headers.append((b"x-request-id", request_id.encode()))
                message["headers"] = headers

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            if response_status is None:
                response_status = 500
            raise
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "request.completed",
                extra={
                    "http_status_code": response_status,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            clear_contextvars()
