"""Unit tests for live stream callable function endpoints."""

from unittest.mock import AsyncMock

import jwt
import pytest
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient

from app.api.functions.dependency import get_live_stream_service
from app.api.functions.errors import app_error_handler, validation_exception_handler
from app.api.functions.routers.live_stream import router
from app.domain.live.stream.stream_domain import LiveStreamService
from app.domain.live.stream.stream_models import CallerContext, LiveStreamSummary
from app.utils.app_errors import AppError
from tests.fixtures.provider_fixtures import FakeLiveStreamProvider

TOKEN_SECRET = "irrelevant-secret-0123456789abcdefghij"


def _build_app(service) -> FastAPI:
    app = FastAPI()
    app.dependency_overrides[get_live_stream_service] = lambda: service
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.include_router(router)
    return app


@pytest.fixture
def mock_service() -> AsyncMock:
    """Create a mock LiveStreamService."""
    return AsyncMock(spec=LiveStreamService)


@pytest.fixture
def client(mock_service: AsyncMock) -> TestClient:
    return TestClient(_build_app(mock_service))


class TestCreateLiveStream:
    """Tests for POST /createLiveStream."""

    def test_create_success(self, client: TestClient, mock_service: AsyncMock):
        """Should return the provider record under ``result``."""
        record = {
            "id": "ls_1",
            "status": "idle",
            "playback_ids": [{"id": "pb_1"}],
            "created_at": "2024-01-01T00:00:00Z",
        }
        mock_service.create_live_stream.return_value = record

        response = client.post("/createLiveStream", json={"data": None})

        assert response.status_code == 200
        assert response.json() == {"result": record}

    def test_create_passes_caller_uid(self, client: TestClient, mock_service: AsyncMock):
        mock_service.create_live_stream.return_value = {"id": "ls_1"}
        token = jwt.encode({"user_id": "user_123"}, TOKEN_SECRET, algorithm="HS256")

        client.post(
            "/createLiveStream",
            json={"data": {}},
            headers={"Authorization": f"Bearer {token}"},
        )

        _, caller = mock_service.create_live_stream.call_args.args
        assert caller == CallerContext(uid="user_123", token={"user_id": "user_123"})

    def test_create_anonymous_caller(self, client: TestClient, mock_service: AsyncMock):
        mock_service.create_live_stream.return_value = {"id": "ls_1"}

        client.post("/createLiveStream", json={"data": None})

        _, caller = mock_service.create_live_stream.call_args.args
        assert caller.uid is None

    def test_create_provider_failure(self, log_messages):
        """Provider failure maps to ABORTED; detail only reaches the log."""
        service = LiveStreamService(FakeLiveStreamProvider(error=RuntimeError("secret detail")))
        client = TestClient(_build_app(service))

        response = client.post("/createLiveStream", json={"data": None})

        assert response.status_code == 409
        assert response.json() == {
            "error": {"status": "ABORTED", "message": "Could not create live stream"}
        }
        assert "secret detail" not in response.text
        assert any("secret detail" in msg for _, msg in log_messages)

    def test_missing_data_is_invalid_argument(self, client: TestClient, mock_service: AsyncMock):
        response = client.post("/createLiveStream", json={})

        assert response.status_code == 400
        assert response.json() == {"error": {"status": "INVALID_ARGUMENT", "message": "Bad Request"}}
        mock_service.create_live_stream.assert_not_called()

    def test_bad_token_is_unauthenticated(self, client: TestClient, mock_service: AsyncMock):
        response = client.post(
            "/createLiveStream",
            json={"data": None},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401
        assert response.json()["error"]["status"] == "UNAUTHENTICATED"
        mock_service.create_live_stream.assert_not_called()


class TestRetrieveLiveStreams:
    """Tests for POST /retrieveLiveStreams."""

    def test_retrieve_success(self, client: TestClient, mock_service: AsyncMock):
        mock_service.list_live_streams.return_value = [
            LiveStreamSummary(id="ls_2", status="active", playback_ids=[{"id": "pb_2"}], created_at="2"),
            LiveStreamSummary(id="ls_1", status="idle", playback_ids=[], created_at="1"),
        ]

        response = client.post("/retrieveLiveStreams", json={"data": None})

        assert response.status_code == 200
        assert response.json() == {
            "result": [
                {"id": "ls_2", "status": "active", "playback_ids": [{"id": "pb_2"}], "created_at": "2"},
                {"id": "ls_1", "status": "idle", "playback_ids": [], "created_at": "1"},
            ]
        }

    def test_retrieve_narrows_provider_records(self):
        records = [
            {"id": "ls_1", "status": "idle", "playback_ids": [], "created_at": "1", "stream_key": "sk"},
        ]
        client = TestClient(_build_app(LiveStreamService(FakeLiveStreamProvider(listed=records))))

        response = client.post("/retrieveLiveStreams", json={"data": None})

        assert response.json()["result"] == [
            {"id": "ls_1", "status": "idle", "playback_ids": [], "created_at": "1"}
        ]

    def test_retrieve_provider_failure(self):
        service = LiveStreamService(FakeLiveStreamProvider(error=ConnectionError("down")))
        client = TestClient(_build_app(service))

        response = client.post("/retrieveLiveStreams", json={"data": None})

        assert response.status_code == 409
        assert response.json() == {
            "error": {"status": "ABORTED", "message": "Could not retrieve live streams"}
        }


class TestDeleteLiveStream:
    """Tests for POST /deleteLiveStream."""

    def test_delete_success(self, client: TestClient, mock_service: AsyncMock):
        mock_service.delete_live_stream.return_value = None

        response = client.post("/deleteLiveStream", json={"data": {"liveStreamId": "ls_1"}})

        assert response.status_code == 200
        assert response.json() == {"result": None}
        live_stream_id, _ = mock_service.delete_live_stream.call_args.args
        assert live_stream_id == "ls_1"

    def test_delete_forwards_id_untrimmed(self, client: TestClient, mock_service: AsyncMock):
        mock_service.delete_live_stream.return_value = None

        client.post("/deleteLiveStream", json={"data": {"liveStreamId": "  LS_1 "}})

        live_stream_id, _ = mock_service.delete_live_stream.call_args.args
        assert live_stream_id == "  LS_1 "

    @pytest.mark.parametrize("data", [None, {}, "ls_1", [1, 2]])
    def test_delete_without_id_forwards_none(
        self, client: TestClient, mock_service: AsyncMock, data
    ):
        mock_service.delete_live_stream.return_value = None

        client.post("/deleteLiveStream", json={"data": data})

        live_stream_id, _ = mock_service.delete_live_stream.call_args.args
        assert live_stream_id is None

    def test_delete_provider_failure(self, log_messages):
        provider = FakeLiveStreamProvider(error=LookupError("Not Found"))
        client = TestClient(_build_app(LiveStreamService(provider)))

        response = client.post("/deleteLiveStream", json={"data": {"liveStreamId": "ls_missing"}})

        assert response.status_code == 409
        assert response.json() == {
            "error": {"status": "ABORTED", "message": "Could not delete live stream"}
        }
        assert (
            "ERROR",
            "Unable to delete live stream, id: ls_missing. Error: Not Found",
        ) in log_messages
