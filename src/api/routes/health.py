"""Health check router."""
from typing import Dict

from fastapi import Request

from .base import BaseRouter
from core.logger import LoggerService


class HealthRouter(BaseRouter):
    """Liveness endpoint."""

    def __init__(self, logger: LoggerService):
        super().__init__(logger=logger, tags=["health"])

    def _setup_routes(self) -> None:
        self.router.add_api_route(
            "/health",
            self.health_check,
            methods=["GET"],
            response_model=Dict[str, str],
            summary="Health Check",
            description="Reports that the operation service is up.",
            operation_id="get_health_status",
            responses={
                200: {
                    "description": "Service is healthy",
                    "content": {"application/json": {"example": {"status": "healthy"}}},
                }
            },
        )

    async def health_check(self, request: Request) -> Dict[str, str]:
        self.logger.debug(
            "Health check requested",
            extra={"request_id": getattr(request.state, "request_id", None)},
        )
        return {"status": "healthy"}
