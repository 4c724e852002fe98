"""API error type and its JSON rendering."""

from typing import Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from tokenlens.server.models.common import ErrorDetails, ErrorResponse


class APIError(Exception):
    """An error reported to the client with a stable error code."""

    def __init__(self, status_code: int, code: str, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


def error_response(status_code: int, code: str, message: str, details: Optional[Any] = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetails(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return error_response(exc.status_code, exc.code, exc.message, exc.details)
