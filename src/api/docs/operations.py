"""Operation endpoints documentation."""
from typing import Dict

from .responses import ERROR_RESPONSES

OPERATIONS_TAGS = ["operations"]

EXECUTE_SUMMARY = "Run an OpenAI operation"
EXECUTE_OPERATION_ID = "execute_operation"
EXECUTE_DESCRIPTION = """
Runs a single OpenAI operation described by a flat option bag.

`operation_type` selects the operation (default `text_generation`). The other
options depend on the operation, see `GET /v1/operations/options`.

The endpoint always answers HTTP 200. Failures of the operation itself, such as
a missing required option or an upstream API error, are reported inside the
envelope with `success: false`.

Responses API operations return `response_id`. Pass it back as
`previous_response_id` to continue the conversation.
"""

EXECUTE_RESPONSES: Dict[int, Dict] = {
    200: {
        "description": "Operation envelope",
        "content": {
            "application/json": {
                "examples": {
                    "success": {
                        "summary": "Text generation",
                        "value": {
                            "success": True,
                            "data": {
                                "content": "Hello! How can I help?",
                                "model": "gpt-4o-mini",
                                "usage": {"input_tokens": 12, "output_tokens": 8},
                                "finish_reason": "completed",
                                "response_format": "text",
                            },
                            "response_id": "resp_abc123",
                        },
                    },
                    "failure": {
                        "summary": "Missing option",
                        "value": {
                            "success": False,
                            "error": {
                                "message": "User message is required for text generation",
                                "type": "ConfigurationError",
                                "operation_type": "text_generation",
                                "model": "gpt-4o-mini",
                            },
                        },
                    },
                }
            }
        },
    },
    **ERROR_RESPONSES,
}

OPTIONS_SUMMARY = "List operation options"
OPTIONS_OPERATION_ID = "list_operation_options"
OPTIONS_DESCRIPTION = """
Returns the option declarations the host form renders, including the
conditions under which each option is shown.
"""

VISIBLE_SUMMARY = "Resolve visible options"
VISIBLE_OPERATION_ID = "resolve_visible_options"
VISIBLE_DESCRIPTION = """
Returns the names of the options shown for the given option values, after
defaults are applied.
"""

OVERVIEW_SUMMARY = "Summarize an operation"
OVERVIEW_OPERATION_ID = "summarize_operation"
OVERVIEW_DESCRIPTION = """
Returns the summary rows (operation, model, input) the host shows on the
operation card.
"""
