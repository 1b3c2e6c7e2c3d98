from typing import Any

from fastapi import APIRouter, Depends

from app.api.functions.dependency import Caller, get_live_stream_service
from app.api.functions.schemas import CallableIn, CallableOut, field_of
from app.domain.live.stream.stream_domain import LiveStreamService
from app.domain.live.stream.stream_models import LiveStreamSummary

router = APIRouter(tags=["Live Stream"])


@router.post("/createLiveStream")
async def create_live_stream(
    payload: CallableIn,
    caller: Caller,
    service: LiveStreamService = Depends(get_live_stream_service),
) -> CallableOut[dict[str, Any]]:
    """Create a public live stream and return the full provider record."""
    record = await service.create_live_stream(payload.data, caller)

    return CallableOut[dict[str, Any]](result=record)


@router.post("/retrieveLiveStreams")
async def retrieve_live_streams(
    payload: CallableIn,
    caller: Caller,
    service: LiveStreamService = Depends(get_live_stream_service),
) -> CallableOut[list[LiveStreamSummary]]:
    """List all live streams as id/status/playback_ids/created_at summaries."""
    summaries = await service.list_live_streams(payload.data, caller)

    return CallableOut[list[LiveStreamSummary]](result=summaries)


@router.post("/deleteLiveStream")
async def delete_live_stream(
    payload: CallableIn,
    caller: Caller,
    service: LiveStreamService = Depends(get_live_stream_service),
) -> CallableOut[Any]:
    """Delete the live stream named by ``liveStreamId``."""
    ack = await service.delete_live_stream(field_of(payload.data, "liveStreamId"), caller)

    return CallableOut[Any](result=ack)
