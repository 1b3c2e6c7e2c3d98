from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from loguru import logger

from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode


def error_response(exc: AppError) -> ORJSONResponse:
    return ORJSONResponse(status_code=exc.status_code, content=exc.to_wire())


async def app_error_handler(request: Request, exc: AppError) -> ORJSONResponse:
    """
    Convert AppError into the callable error envelope.

    The chained cause (if any) was already logged where it was caught; only
    the code and fixed message go back to the caller.
    """
    log_msg = f"{exc.errcode.value} {exc.erresid} msg={exc.errmesg} caller={exc.caller_info}"
    if exc.status_code >= HttpStatusCode.INTERNAL_SERVER_ERROR:
        logger.error(log_msg)
    else:
        logger.warning(log_msg)

    return error_response(exc)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    logger.warning(
        "Validation error: path={} method={} errors={}",
        request.url.path,
        request.method,
        exc.errors(),
    )

    failure = AppError(
        errcode=AppErrorCode.E_INVALID_ARGUMENT,
        errmesg="Bad Request",
        status_code=HttpStatusCode.BAD_REQUEST,
    )
    return error_response(failure)


def internal_error_response() -> ORJSONResponse:
    failure = AppError(
        errcode=AppErrorCode.E_INTERNAL,
        errmesg="INTERNAL",
        status_code=HttpStatusCode.INTERNAL_SERVER_ERROR,
    )
    return error_response(failure)
