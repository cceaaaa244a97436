"""Error handling middleware."""
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from api.errors import ServiceError
from core.logger import LoggerService
from core.settings import Settings


class ErrorHandlerMiddleware:
    """Turns faults raised outside the dispatcher into JSON error bodies.

    Operation failures never reach this middleware: the dispatcher reports
    them in its own envelope. Error body format::

        {"error": {"code": int, "message": str, "details": {...}}}
    """

    def __init__(
        self,
        app: ASGIApp,
        logger: LoggerService,
        settings: Settings,
    ) -> None:
        """Initialize middleware.

        Args:
            app: ASGI application
            logger: Logger service
            settings: Application settings
        """
        self.app = app
        self.logger = logger.get_logger(__name__)
        self.settings = settings

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        request_id = getattr(request.state, "request_id", None)

        try:
            await self.app(scope, receive, send)
            return

        except RequestValidationError as e:
            self.logger.error(
                "Request validation error",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "errors": e.errors(),
                },
            )
            error = ServiceError(
                code=422,
                message="Request validation error",
                details={"errors": e.errors()},
            )

        except ServiceError as e:
            self.logger.error(
                "Service error",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "error_code": e.code,
                    "error_message": e.message,
                },
            )
            error = e

        except Exception as e:
            self.logger.error(
                "Unexpected error",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "method": request.method,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            details = {"error": str(e)} if self.settings.DEBUG else {}
            error = ServiceError(
                code=500, message="Internal server error", details=details
            )

        response = JSONResponse(status_code=error.code, content=error.to_body())
        await response(scope, receive, send)
