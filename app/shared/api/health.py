from fastapi import APIRouter, Request

from .utils import ApiSuccess


router = APIRouter()


@router.get('/health', response_model=ApiSuccess)
async def health(request: Request):
    service = getattr(request.app.state, 'live_stream_service', None)
    return ApiSuccess(results={'status': 'OK', 'ready': service is not None})
