"""Live stream domain models and the provider capability interface."""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field


class CallerContext(BaseModel):
    """Identity of the remote caller, as supplied by the function host."""

    uid: str | None = None
    token: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return self.uid is not None

    @property
    def display_uid(self) -> str:
        return self.uid if self.uid is not None else "unknown"


class LiveStreamSummary(BaseModel):
    """Narrowed view of a provider live stream record.

    Field names mirror the provider's; values are passed through untouched.
    """

    model_config = ConfigDict(extra="ignore")

    id: Any = None
    status: Any = None
    playback_ids: Any = None
    created_at: Any = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> LiveStreamSummary:
        return cls(
            id=record.get("id"),
            status=record.get("status"),
            playback_ids=record.get("playback_ids"),
            created_at=record.get("created_at"),
        )


class LiveStreamProvider(Protocol):
    """Minimal set of live stream calls the domain needs from a video provider."""

    async def create_live_stream(
        self,
        playback_policy: list[str],
        new_asset_playback_policy: list[str],
    ) -> dict[str, Any]: ...

    async def list_live_streams(self) -> list[dict[str, Any]]: ...

    async def delete_live_stream(self, live_stream_id: Any) -> Any: ...
