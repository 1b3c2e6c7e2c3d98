"""Mux live stream provider.

This module provides a thin async wrapper around the `mux-python` package.

Based on the official Mux Python SDK:
https://github.com/muxinc/mux-python

Usage:
    from app.services.integrations.mux_service import MuxCredentials, MuxLiveStreamProvider

    provider = MuxLiveStreamProvider(MuxCredentials(token_id="...", token_secret="..."))

    # Create a live stream
    record = await provider.create_live_stream(["public"], ["public"])

    # List live streams
    records = await provider.list_live_streams()

    # Delete a live stream
    await provider.delete_live_stream(record["id"])
"""

from __future__ import annotations

import asyncio
from typing import Any

import mux_python
from loguru import logger
from pydantic import BaseModel

from app.app_config import AppEnvironConfig


class MuxCredentials(BaseModel):
    """Mux access token pair."""

    token_id: str | None = None
    token_secret: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.token_id and self.token_secret)


def _to_record(live_api: mux_python.LiveStreamsApi, mux_model: Any) -> dict[str, Any]:
    """Convert a mux_python model into the JSON object Mux sent.

    Uses the SDK serializer, so keys follow the wire names and attributes Mux
    did not send are left out rather than filled with None.
    """
    return live_api.api_client.sanitize_for_serialization(mux_model)


class MuxLiveStreamProvider:
    """Live stream provider backed by the Mux Video API (mux-python package).

    The SDK is synchronous, so every call is run in a worker thread to keep the
    event loop free while waiting on Mux.
    """

    def __init__(self, credentials: MuxCredentials) -> None:
        self._credentials = credentials
        self._live_api: mux_python.LiveStreamsApi | None = None
        logger.info("MuxLiveStreamProvider initialized")

    def _get_configuration(self) -> mux_python.Configuration:
        """Build a Mux configuration with credentials.

        Raises:
            ValueError: If the token id or secret is not configured
        """
        if not self._credentials.is_complete:
            logger.error("MUX_TOKEN_ID or MUX_TOKEN_SECRET not configured")
            raise ValueError(
                "Streaming provider credentials must be configured. "
                "Set them in env.local or environment variables."
            )

        configuration = mux_python.Configuration()
        configuration.username = self._credentials.token_id
        configuration.password = self._credentials.token_secret
        logger.info("Mux configuration created")
        return configuration

    def _get_live_api(self) -> mux_python.LiveStreamsApi:
        """Get or create the LiveStreamsApi client."""
        if self._live_api is None:
            config = self._get_configuration()
            self._live_api = mux_python.LiveStreamsApi(mux_python.ApiClient(config))
            logger.info("Mux LiveStreamsApi client created")
        return self._live_api

    def _create_live_stream_sync(
        self,
        playback_policy: list[str],
        new_asset_playback_policy: list[str],
    ) -> dict[str, Any]:
        live_api = self._get_live_api()

        create_request = mux_python.CreateLiveStreamRequest(
            playback_policy=playback_policy,
            new_asset_settings=mux_python.CreateAssetRequest(
                playback_policy=new_asset_playback_policy,
            ),
        )
        logger.debug(
            f"Creating Mux live stream with playback_policy={playback_policy}, "
            f"new_asset_playback_policy={new_asset_playback_policy}"
        )

        response = live_api.create_live_stream(create_request)
        return _to_record(live_api, response.data)  # type: ignore[attr-defined]

    def _list_live_streams_sync(self) -> list[dict[str, Any]]:
        live_api = self._get_live_api()
        response = live_api.list_live_streams()
        return [_to_record(live_api, ls) for ls in (response.data or [])]  # type: ignore[attr-defined]

    def _delete_live_stream_sync(self, live_stream_id: Any) -> Any:
        live_api = self._get_live_api()
        logger.debug(f"Deleting Mux live stream id={live_stream_id}")
        return live_api.delete_live_stream(live_stream_id)

    async def create_live_stream(
        self,
        playback_policy: list[str],
        new_asset_playback_policy: list[str],
    ) -> dict[str, Any]:
        """Create a new Mux live stream.

        Args:
            playback_policy: Playback policies for the live stream
            new_asset_playback_policy: Playback policies for assets recorded from it

        Returns:
            The live stream record exactly as Mux returned it, including:
                - id: Unique stream identifier
                - stream_key: RTMP stream key
                - playback_ids: List of playback IDs for viewing
                - status: Stream status (idle, active, disabled)

        Raises:
            ApiException: If API request fails
        """
        return await asyncio.to_thread(
            self._create_live_stream_sync, playback_policy, new_asset_playback_policy
        )

    async def list_live_streams(self) -> list[dict[str, Any]]:
        """List live streams, as returned by a single Mux list call.

        Raises:
            ApiException: If API request fails
        """
        return await asyncio.to_thread(self._list_live_streams_sync)

    async def delete_live_stream(self, live_stream_id: Any) -> Any:
        """Delete a live stream.

        Returns:
            Mux's deletion acknowledgment (empty for a successful delete)

        Raises:
            NotFoundException: If stream not found
            ApiException: If API request fails
        """
        return await asyncio.to_thread(self._delete_live_stream_sync, live_stream_id)


class DemoLiveStreamProvider:
    """Stub provider used when DEMO_MODE is on. Makes no network calls."""

    DEMO_RECORD: dict[str, Any] = {
        "id": "ls_demo_001",
        "stream_key": "sk_demo_redacted",
        "status": "idle",
        "playback_ids": [{"id": "pb_demo_001", "policy": "public"}],
        "new_asset_settings": {"playback_policies": ["public"]},
        "created_at": "0",
    }

    async def create_live_stream(
        self,
        playback_policy: list[str],
        new_asset_playback_policy: list[str],
    ) -> dict[str, Any]:
        logger.info("DEMO_MODE=true: returning stubbed live stream")
        return {
            **self.DEMO_RECORD,
            "playback_ids": [{"id": "pb_demo_001", "policy": p} for p in playback_policy],
            "new_asset_settings": {"playback_policies": list(new_asset_playback_policy)},
        }

    async def list_live_streams(self) -> list[dict[str, Any]]:
        logger.info("DEMO_MODE=true: returning stubbed live stream list")
        return [dict(self.DEMO_RECORD)]

    async def delete_live_stream(self, live_stream_id: Any) -> Any:
        logger.info("DEMO_MODE=true: delete_live_stream is a no-op")
        return None


def build_live_stream_provider(
    cfg: AppEnvironConfig,
) -> MuxLiveStreamProvider | DemoLiveStreamProvider:
    """Build the provider once at startup from the environment config."""
    if cfg.DEMO_MODE:
        logger.info("DEMO_MODE=true: using stubbed live stream provider")
        return DemoLiveStreamProvider()

    credentials = MuxCredentials(token_id=cfg.MUX_TOKEN_ID, token_secret=cfg.MUX_TOKEN_SECRET)
    if not credentials.is_complete:
        logger.error("MUX_TOKEN_ID or MUX_TOKEN_SECRET not configured; provider calls will fail")
    return MuxLiveStreamProvider(credentials)
