"""Exception handlers rendering every failure as ``{"error": message}``."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from easyalert.api.deps import INVALID_JSON
from easyalert.api.responses import PrettyJSONResponse, error_response
from easyalert.errors import EasyAlertError, InternalError

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = InternalError.default_message


async def easyalert_error_handler(request: Request, exc: EasyAlertError) -> PrettyJSONResponse:
    message = exc.message
    if exc.status_code >= 500 and not isinstance(exc, InternalError):
        # e.g. a RecordNotFound nobody branched on
        logger.error("Unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path)
        message = UNKNOWN_ERROR
    return error_response(exc.status_code, message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> PrettyJSONResponse:
    return error_response(422, INVALID_JSON)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> PrettyJSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> PrettyJSONResponse:
    logger.error(
        "Unexpected error on %s %s",
        request.method,
        request.url.path,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return error_response(500, UNKNOWN_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EasyAlertError, easyalert_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
