"""Shared response examples for API documentation."""
from typing import Dict

ERROR_RESPONSES: Dict[int, Dict] = {
    401: {
        "description": "Missing or invalid service key",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": 401,
                        "message": "Authentication required",
                        "details": {"error": "Service API key required"},
                    }
                }
            }
        },
    },
    422: {
        "description": "Request body is not a JSON object",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": 422,
                        "message": "Request validation error",
                        "details": {"errors": []},
                    }
                }
            }
        },
    },
    500: {
        "description": "Unexpected fault outside the operation",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": 500,
                        "message": "Internal server error",
                        "details": {"error": "Unexpected error occurred"},
                    }
                }
            }
        },
    },
}
