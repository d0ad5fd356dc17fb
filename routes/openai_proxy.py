"""
Route handler for raw provider passthrough.
"""
from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, StreamingResponse
from starlette.background import BackgroundTask
from services.proxy import ProxyService
from services.stream_service import StreamService
from config import Config
from utils.logger import app_logger

router = APIRouter()


@router.api_route("/api/openai", methods=["GET", "POST"])
async def openai_proxy(request: Request):
    """Forward the request to the provider endpoint named by the 'path' header."""
    path = request.headers.get("path")
    if not path:
        return PlainTextResponse("missing 'path' header", status_code=400)

    try:
        settings = Config.pipeline_settings(request.headers.get("token"))
        body = await request.body()
        response = await ProxyService.forward(settings, request.method, path, body or None)
    except Exception as e:
        app_logger.error(f"[Proxy] {e}")
        return PlainTextResponse(StreamService.format_exception_block(e), status_code=502)

    return StreamingResponse(
        response.aiter_bytes(),
        status_code=response.status_code,
        media_type=response.headers.get("content-type"),
        background=BackgroundTask(response.aclose)
    )
