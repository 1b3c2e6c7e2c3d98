"""Provider error translation shared by all live stream operations."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from loguru import logger

from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode


@asynccontextmanager
async def provider_call(errmesg: str, log_message: str) -> AsyncIterator[None]:
    """Turn any failure inside the block into a generic ``aborted`` AppError.

    The underlying error is written to the server log only. Callers receive
    ``errmesg`` and nothing else.

    Args:
        errmesg: Fixed user-facing message for the operation
        log_message: Server-side context, logged as ``"<log_message>. Error: <err>"``
    """
    try:
        yield
    except Exception as exc:
        logger.error(f"{log_message}. Error: {exc}")
        raise AppError(
            errcode=AppErrorCode.E_ABORTED,
            errmesg=errmesg,
            status_code=HttpStatusCode.CONFLICT,
        ) from exc
