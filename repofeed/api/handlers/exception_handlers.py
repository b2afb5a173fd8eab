from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from repofeed.core.responses import error_response
from repofeed.utils.logger import logger


def _field_errors(exc: RequestValidationError):
    for error in exc.errors():
        # loc is ("path", "event_id"), ("header", ...) and so on.
        field = ".".join(str(loc) for loc in error["loc"]) if error["loc"] else "general"
        yield {"field": field, "message": error["msg"]}


async def unprocessable_entity_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = list(_field_errors(exc))
    logger.warning(f"Invalid request to {request.url.path}: {errors}")
    return error_response(
        errors,
        message="The received data is invalid. Please check the fields below for details.",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
