"""Live stream domain service - thin facade over the video provider."""

from typing import Any

from loguru import logger

from ._guard import provider_call
from .stream_models import CallerContext, LiveStreamProvider, LiveStreamSummary

PUBLIC_PLAYBACK_POLICY = ["public"]

E_MSG_CREATE = "Could not create live stream"
E_MSG_RETRIEVE = "Could not retrieve live streams"
E_MSG_DELETE = "Could not delete live stream"


class LiveStreamService:
    """Create, list and delete provider live streams on behalf of remote callers.

    Holds no state besides the provider client; the provider is the single
    source of truth for every live stream.
    """

    def __init__(self, provider: LiveStreamProvider):
        self._provider = provider

    async def create_live_stream(
        self,
        data: Any = None,
        caller: CallerContext | None = None,
    ) -> dict[str, Any]:
        """Create a public live stream whose recorded asset is public too.

        The request payload is accepted but not used; playback policies are fixed.
        """
        caller = caller or CallerContext()

        async with provider_call(
            E_MSG_CREATE, f"Unable to start the live stream {caller.display_uid}"
        ):
            response = await self._provider.create_live_stream(
                playback_policy=list(PUBLIC_PLAYBACK_POLICY),
                new_asset_playback_policy=list(PUBLIC_PLAYBACK_POLICY),
            )

        logger.info(f"Live stream created: {response}")
        return response

    async def list_live_streams(
        self,
        data: Any = None,
        caller: CallerContext | None = None,
    ) -> list[LiveStreamSummary]:
        """Return every live stream the provider reports, in provider order."""
        async with provider_call(E_MSG_RETRIEVE, "Unable to retrieve live streams"):
            live_streams = await self._provider.list_live_streams()
            summaries = [LiveStreamSummary.from_record(ls) for ls in live_streams]

        logger.info(f"Live streams retrieved: {[s.model_dump() for s in summaries]}")
        return summaries

    async def delete_live_stream(
        self,
        live_stream_id: Any,
        caller: CallerContext | None = None,
    ) -> Any:
        """Delete a live stream by id.

        The id is forwarded exactly as received; the provider rejects bad ids.
        """
        async with provider_call(
            E_MSG_DELETE, f"Unable to delete live stream, id: {live_stream_id}"
        ):
            response = await self._provider.delete_live_stream(live_stream_id)

        logger.info(f"Live stream deleted: {live_stream_id}")
        return response
