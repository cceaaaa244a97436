"""Service key authentication middleware."""
import re
import secrets
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from api.errors import ServiceError
from core.logger import LoggerService
from core.settings import Settings


class AuthMiddleware:
    """Bearer token check against the configured service key.

    Only active when ``ENABLE_SERVICE_AUTH`` is set. Documentation and health
    routes stay public.
    """

    PUBLIC_ROUTES = {
        "/docs",
        "/redoc",
        "/openapi.json",
        "/health",
    }

    TOKEN_PATTERN = re.compile(r"^Bearer\s+(\S+)$")

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
            settings: Settings instance
        """
        self.app = app
        self.logger = logger.get_logger(__name__)
        self.settings = settings

    def _get_token(self, request: Request) -> Optional[str]:
        """Extract the Bearer token.

        Raises:
            ServiceError: If the header is present but malformed
        """
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return None

        match = self.TOKEN_PATTERN.match(auth_header)
        if not match:
            raise ServiceError(
                code=401,
                message="Authentication required",
                details={"error": "Bearer token required"},
            )
        return match.group(1)

    def _authenticate(self, request: Request) -> None:
        """Validate the service key.

        Raises:
            ServiceError: If the key is missing, wrong or not configured
        """
        if not self.settings.SERVICE_API_KEY:
            raise ServiceError(
                code=500,
                message="Service authentication misconfigured",
                details={"error": "SERVICE_API_KEY not set"},
            )

        token = self._get_token(request)
        if not token:
            raise ServiceError(
                code=401,
                message="Authentication required",
                details={"error": "Service API key required"},
            )

        if not secrets.compare_digest(
            token.encode(), self.settings.SERVICE_API_KEY.encode()
        ):
            raise ServiceError(
                code=401,
                message="Invalid service API key",
                details={"error": "Service API key validation failed"},
            )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        path = request.url.path

        if not self.settings.ENABLE_SERVICE_AUTH or path in self.PUBLIC_ROUTES:
            await self.app(scope, receive, send)
            return

        request_id = getattr(request.state, "request_id", None)
        try:
            self._authenticate(request)
        except ServiceError as e:
            self.logger.warning(
                "Service authentication failed",
                extra={
                    "request_id": request_id,
                    "path": path,
                    "reason": e.message,
                },
            )
            response = JSONResponse(status_code=e.code, content=e.to_body())
            await response(scope, receive, send)
            return

        self.logger.debug(
            "Service authentication successful",
            extra={"request_id": request_id, "path": path},
        )
        await self.app(scope, receive, send)
