"""Router base class."""
from abc import ABC, abstractmethod
from typing import List, Optional

from fastapi import APIRouter, FastAPI

from core.logger import LoggerService


class BaseRouter(ABC):
    """Owns an ``APIRouter`` and registers its endpoints on construction."""

    def __init__(
        self,
        logger: LoggerService,
        prefix: str = "",
        tags: Optional[List[str]] = None,
    ):
        """Initialize router.

        Args:
            logger: Logger service instance
            prefix: URL prefix for all routes
            tags: OpenAPI tags for documentation

        Raises:
            ValueError: If the logger service is missing
        """
        if not logger:
            raise ValueError("Logger service is required")

        self.logger = logger.get_logger(self.__class__.__module__)
        self.router = APIRouter(prefix=prefix, tags=tags or [])
        self._setup_routes()

    @abstractmethod
    def _setup_routes(self) -> None:
        """Register endpoints on ``self.router``."""

    def mount(self, app: FastAPI) -> None:
        """Include the router's endpoints into the application."""
        app.include_router(self.router)
        self.logger.debug(
            "Router mounted",
            extra={"router": self.__class__.__name__, "routes": len(self.router.routes)},
        )
