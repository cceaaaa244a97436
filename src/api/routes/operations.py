"""Operation router implementation."""
from typing import Any, Dict, List, Optional

from fastapi import Body, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_200_OK

from ..docs import (
    EXECUTE_DESCRIPTION,
    EXECUTE_OPERATION_ID,
    EXECUTE_RESPONSES,
    EXECUTE_SUMMARY,
    OPERATIONS_TAGS,
    OPTIONS_DESCRIPTION,
    OPTIONS_OPERATION_ID,
    OPTIONS_SUMMARY,
    OVERVIEW_DESCRIPTION,
    OVERVIEW_OPERATION_ID,
    OVERVIEW_SUMMARY,
    VISIBLE_DESCRIPTION,
    VISIBLE_OPERATION_ID,
    VISIBLE_SUMMARY,
)
from .base import BaseRouter
from core.logger import LoggerService
from operations.dispatcher import OperationDispatcher
from options import host_options, overview, visible_fields

OptionBag = Optional[Dict[str, Any]]


class OperationsRouter(BaseRouter):
    """Exposes the dispatcher and the option declarations over HTTP."""

    def __init__(
        self,
        logger: LoggerService,
        dispatcher: OperationDispatcher,
    ) -> None:
        """Initialize router.

        Args:
            logger: Logger service instance
            dispatcher: Operation dispatcher instance

        Raises:
            ValueError: If the dispatcher is missing
        """
        if not dispatcher:
            raise ValueError("Operation dispatcher is required")

        self.dispatcher = dispatcher
        super().__init__(logger=logger, prefix="/v1/operations", tags=OPERATIONS_TAGS)

    def _setup_routes(self) -> None:
        self.router.add_api_route(
            "",
            self.execute,
            methods=["POST"],
            responses=EXECUTE_RESPONSES,
            summary=EXECUTE_SUMMARY,
            description=EXECUTE_DESCRIPTION,
            operation_id=EXECUTE_OPERATION_ID,
        )
        self.router.add_api_route(
            "/options",
            self.list_options,
            methods=["GET"],
            summary=OPTIONS_SUMMARY,
            description=OPTIONS_DESCRIPTION,
            operation_id=OPTIONS_OPERATION_ID,
        )
        self.router.add_api_route(
            "/options/visible",
            self.visible_options,
            methods=["POST"],
            summary=VISIBLE_SUMMARY,
            description=VISIBLE_DESCRIPTION,
            operation_id=VISIBLE_OPERATION_ID,
        )
        self.router.add_api_route(
            "/overview",
            self.summarize,
            methods=["POST"],
            summary=OVERVIEW_SUMMARY,
            description=OVERVIEW_DESCRIPTION,
            operation_id=OVERVIEW_OPERATION_ID,
        )

    async def execute(
        self,
        request: Request,
        options: OptionBag = Body(default=None),
    ) -> JSONResponse:
        """Run one operation and answer with its envelope.

        Args:
            request: FastAPI request object
            options: Option bag

        Returns:
            The operation envelope with HTTP 200, whatever the outcome
        """
        request_id = getattr(request.state, "request_id", None)
        self.logger.info(
            "Operation requested",
            extra={
                "request_id": request_id,
                "operation_type": (options or {}).get("operation_type"),
            },
        )

        result = await self.dispatcher.execute(options or {})

        self.logger.debug(
            "Operation answered",
            extra={"request_id": request_id, "success": result.success},
        )
        return JSONResponse(status_code=HTTP_200_OK, content=result.to_payload())

    async def list_options(self) -> Dict[str, List[Dict[str, Any]]]:
        return {"options": host_options()}

    async def visible_options(
        self, values: OptionBag = Body(default=None)
    ) -> Dict[str, List[str]]:
        return {"fields": visible_fields(values or {})}

    async def summarize(
        self, values: OptionBag = Body(default=None)
    ) -> Dict[str, List[Dict[str, str]]]:
        return {"overview": overview(values or {})}
