"""Request ID middleware."""
import time
from uuid import uuid4

from fastapi import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.logger import LoggerService
from core.settings import Settings

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware:
    """Tags every request with an ID and logs its timing.

    A client supplied ``X-Request-ID`` is kept, otherwise a UUID is generated.
    The ID is stored in ``request.state`` and echoed in the response headers.
    """

    # Seconds after which a request is logged as slow
    SLOW_REQUEST_THRESHOLD = 5.0

    def __init__(
        self,
        app: ASGIApp,
        logger: LoggerService,
        settings: Settings,
    ) -> None:
        """Initialize middleware.

        Args:
            app: ASGI application
            logger: Logger service for request logging
            settings: Settings instance
        """
        self.app = app
        self.logger = logger.get_logger(__name__)
        self.settings = settings

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        self.logger.info(
            "Incoming request",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "content_length": request.headers.get("content-length", "0"),
            },
        )

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER.encode(), request_id.encode()))
                message["headers"] = headers
            await send(message)

        start_time = time.perf_counter()
        try:
            await self.app(scope, receive, send_with_request_id)
        except Exception as e:
            self.logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "process_time_seconds": time.perf_counter() - start_time,
                },
                exc_info=True,
            )
            raise

        process_time = time.perf_counter() - start_time
        if process_time > self.SLOW_REQUEST_THRESHOLD:
            self.logger.warning(
                "Slow request detected",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "process_time_seconds": process_time,
                },
            )
        self.logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "process_time_seconds": process_time,
            },
        )
