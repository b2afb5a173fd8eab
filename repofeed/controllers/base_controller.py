from fastapi.responses import JSONResponse
from typing import Any

from repofeed.core.responses import error_response, success_response


class BaseController:
    def success(
        self, data: Any, message: str = "Request was successful", status_code: int = 200
    ) -> JSONResponse:
        """Return a success response with status code and JSON data"""
        return success_response(data, message=message, status_code=status_code)

    def failure(
        self, error: Any, message: str = "An error occurred", status_code: int = 400
    ) -> JSONResponse:
        """Return a failure response with status code and error message"""
        return error_response(error, message=message, status_code=status_code)
