"""Tests for caller context extraction."""

from unittest.mock import MagicMock, patch

import jwt
import pytest

from app.api.functions.dependency import decode_caller_token, get_caller_context
from app.app_config import AppEnvironConfig
from app.utils.app_errors import AppError, AppErrorCode

SECRET = "test-functions-secret-0123456789abcdef"
OTHER_SECRET = "some-other-secret-0123456789abcdefghij"


def _request(headers: dict[str, str]) -> MagicMock:
    request = MagicMock()
    request.headers = {k.lower(): v for k, v in headers.items()}
    return request


class TestGetCallerContext:
    """Tests for get_caller_context dependency."""

    async def test_no_header_is_anonymous(self):
        caller = await get_caller_context(_request({}))

        assert caller.uid is None
        assert caller.display_uid == "unknown"
        assert not caller.is_authenticated

    @pytest.mark.parametrize(
        "claims, expected_uid",
        [
            ({"user_id": "u1", "sub": "s1"}, "u1"),
            ({"uid": "u2", "sub": "s2"}, "u2"),
            ({"sub": "s3"}, "s3"),
            ({"email": "someone@example.com"}, None),
        ],
    )
    async def test_uid_claim_priority(self, claims, expected_uid):
        token = jwt.encode(claims, SECRET, algorithm="HS256")

        caller = await get_caller_context(_request({"Authorization": f"Bearer {token}"}))

        assert caller.uid == expected_uid
        assert caller.token == claims

    async def test_non_bearer_scheme_rejected(self):
        with pytest.raises(AppError) as exc_info:
            await get_caller_context(_request({"Authorization": "Basic dXNlcjpwd2Q="}))

        assert exc_info.value.errcode == AppErrorCode.E_UNAUTHENTICATED
        assert exc_info.value.status_code == 401

    async def test_verified_when_secret_configured(self):
        token = jwt.encode({"user_id": "u1"}, OTHER_SECRET, algorithm="HS256")
        cfg = AppEnvironConfig(FUNCTIONS_JWT_SECRET=SECRET)

        with patch("app.api.functions.dependency.get_app_environ_config", return_value=cfg):
            with pytest.raises(AppError) as exc_info:
                await get_caller_context(_request({"Authorization": f"Bearer {token}"}))

        assert exc_info.value.errcode == AppErrorCode.E_UNAUTHENTICATED

    async def test_valid_signature_accepted(self):
        token = jwt.encode({"user_id": "u1"}, SECRET, algorithm="HS256")
        cfg = AppEnvironConfig(FUNCTIONS_JWT_SECRET=SECRET)

        with patch("app.api.functions.dependency.get_app_environ_config", return_value=cfg):
            caller = await get_caller_context(_request({"Authorization": f"Bearer {token}"}))

        assert caller.uid == "u1"


class TestDecodeCallerToken:
    def test_unverified_decode_ignores_signature(self):
        token = jwt.encode({"sub": "abc"}, OTHER_SECRET, algorithm="HS256")

        assert decode_caller_token(token, None) == {"sub": "abc"}

    def test_garbage_raises_invalid_token(self):
        with pytest.raises(jwt.InvalidTokenError):
            decode_caller_token("garbage", None)
