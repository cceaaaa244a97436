"""OpenAI flow operation FastAPI application."""
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from api.errors import ServiceError
from api.middleware.auth import AuthMiddleware
from api.middleware.error_handler import ErrorHandlerMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.routes.health import HealthRouter
from api.routes.operations import OperationsRouter


class OperationsApp(FastAPI):
    """FastAPI application serving the flow operation."""

    def __init__(
        self,
        lifespan: Optional[Callable] = None,
    ) -> None:
        """Initialize application.

        Args:
            lifespan: Application lifespan manager
        """
        self._configured = False
        super().__init__(
            title="OpenAI Flow Operation",
            description="""
            # OpenAI Flow Operation

            Runs OpenAI operations for flow automation steps and serves the
            option declarations of the operation form.
            """,
            version="0.0.0",  # Replaced in configure()
            docs_url="/docs",
            redoc_url="/redoc",
            lifespan=lifespan,
        )

        # Set by init_app before configure()
        self.state.logger = None
        self.state.settings = None
        self.state.dispatcher = None

    def configure(self) -> None:
        """Add middleware and routes once dependencies are set.

        Raises:
            RuntimeError: If called twice or before dependencies are set
        """
        if self._configured:
            raise RuntimeError("Application is already configured")

        if not all([self.state.logger, self.state.settings, self.state.dispatcher]):
            raise RuntimeError("Dependencies must be set before configuring the app.")

        logger = self.state.logger
        settings = self.state.settings
        app_logger = logger.get_logger(__name__)
        self.version = settings.VERSION

        app_logger.info(
            "Configuring CORS middleware",
            extra={"allowed_origins": settings.BACKEND_CORS_ORIGINS},
        )
        self.add_middleware(
            CORSMiddleware,
            allow_origins=settings.BACKEND_CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        # Added innermost first, RequestIDMiddleware ends up outermost
        self.add_middleware(ErrorHandlerMiddleware, logger=logger, settings=settings)
        self.add_middleware(AuthMiddleware, logger=logger, settings=settings)
        self.add_middleware(RequestIDMiddleware, logger=logger, settings=settings)

        HealthRouter(logger=logger).mount(self)
        OperationsRouter(logger=logger, dispatcher=self.state.dispatcher).mount(self)

        self.add_exception_handler(HTTPException, self._http_exception_handler)
        self.add_exception_handler(
            RequestValidationError, self._validation_exception_handler
        )

        app_logger.info(
            "Application configuration completed",
            extra={
                "middleware_count": len(self.user_middleware),
                "router_count": len(self.router.routes),
                "service_auth": settings.ENABLE_SERVICE_AUTH,
            },
        )
        self._configured = True

    async def _http_exception_handler(
        self, request: Request, exc: HTTPException
    ) -> JSONResponse:  # type: ignore
        self.state.logger.get_logger(__name__).warning(
            "HTTP error occurred",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "path": request.url.path,
                "status_code": exc.status_code,
                "detail": exc.detail,
            },
        )
        error = ServiceError(code=exc.status_code, message=str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content=error.to_body())

    async def _validation_exception_handler(
        self, request: Request, exc: RequestValidationError
    ) -> JSONResponse:  # type: ignore
        errors = [
            {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        self.state.logger.get_logger(__name__).warning(
            "Validation error",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "path": request.url.path,
                "errors": errors,
            },
        )
        error = ServiceError(
            code=422, message="Request validation error", details={"errors": errors}
        )
        return JSONResponse(status_code=422, content=error.to_body())
