"""Response envelopes shared by controllers and exception handlers.

Success: {"status": "success", "message": "...", "data": ...}
Error:   {"status": "error", "message": "...", "error": ...}
"""

from typing import Any

from fastapi.responses import JSONResponse


def _envelope(outcome: str, message: str, status_code: int, **fields: Any) -> JSONResponse:
    return JSONResponse(
        content={"status": outcome, "message": message, **fields},
        status_code=status_code,
    )


def success_response(
    data: Any,
    message: str = "Request was successful",
    status_code: int = 200,
) -> JSONResponse:
    return _envelope("success", message, status_code, data=data)


def error_response(
    error: Any,
    message: str = "An error occurred",
    status_code: int = 400,
) -> JSONResponse:
    """`error` is a short description or a list of per-field problems."""
    return _envelope("error", message, status_code, error=error)
