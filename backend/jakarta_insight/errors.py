"""
JSON error responses shared by every route.
"""
from __future__ import annotations

from typing import Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse


class APIError(Exception):
    """A failed request, rendered as ``{"error": ..., "details": ...}``."""

    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    body: dict[str, Any] = {"error": exc.message}
    if exc.details is not None:
        body["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=body)


def bad_request(message: str, details: Optional[Any] = None) -> APIError:
    return APIError(message, status_code=400, details=details)
