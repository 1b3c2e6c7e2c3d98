from typing import Annotated, Any

import jwt
from fastapi import Depends, Request
from loguru import logger

from app.app_config import get_app_environ_config
from app.domain.live.stream.stream_domain import LiveStreamService
from app.domain.live.stream.stream_models import CallerContext
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

# Claims checked for the caller id, first match wins
_UID_CLAIMS = ("user_id", "uid", "sub")


def decode_caller_token(token: str, secret: str | None) -> dict[str, Any]:
    """Decode a caller JWT, verifying it only when a secret is configured."""
    if secret:
        return jwt.decode(token, secret, algorithms=["HS256"])
    return jwt.decode(token, options={"verify_signature": False, "verify_exp": False})


async def get_caller_context(request: Request) -> CallerContext:
    # Do not log request headers here (Authorization carries the token).
    auth_header = request.headers.get("authorization")
    if not auth_header:
        return CallerContext()

    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AppError(
            errcode=AppErrorCode.E_UNAUTHENTICATED,
            errmesg="Unauthenticated",
            status_code=HttpStatusCode.UNAUTHORIZED,
        )

    try:
        claims = decode_caller_token(token.strip(), get_app_environ_config().FUNCTIONS_JWT_SECRET)
    except jwt.InvalidTokenError as e:
        logger.debug("invalid caller token: {}", e)
        raise AppError(
            errcode=AppErrorCode.E_UNAUTHENTICATED,
            errmesg="Unauthenticated",
            status_code=HttpStatusCode.UNAUTHORIZED,
        ) from e

    uid = next((str(claims[k]) for k in _UID_CLAIMS if claims.get(k)), None)
    logger.debug("Caller uid: {}", uid)
    return CallerContext(uid=uid, token=claims)


def get_live_stream_service(request: Request) -> LiveStreamService:
    """Facade built once at startup, see app.main.lifespan."""
    return request.app.state.live_stream_service


Caller = Annotated[CallerContext, Depends(get_caller_context)]
