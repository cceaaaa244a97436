"""API documentation package.

OpenAPI texts and response examples for the operation endpoints.
"""

from .operations import (
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
from .responses import ERROR_RESPONSES

__all__ = [
    "ERROR_RESPONSES",
    "EXECUTE_DESCRIPTION",
    "EXECUTE_OPERATION_ID",
    "EXECUTE_RESPONSES",
    "EXECUTE_SUMMARY",
    "OPERATIONS_TAGS",
    "OPTIONS_DESCRIPTION",
    "OPTIONS_OPERATION_ID",
    "OPTIONS_SUMMARY",
    "OVERVIEW_DESCRIPTION",
    "OVERVIEW_OPERATION_ID",
    "OVERVIEW_SUMMARY",
    "VISIBLE_DESCRIPTION",
    "VISIBLE_OPERATION_ID",
    "VISIBLE_SUMMARY",
]
