"""
Route handler for streaming chat.
Handles the /api/chat-stream endpoint: chain building, proxying and stream relay.
"""
import json
from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, StreamingResponse
from models.api_models import ChatCompletionRequest
from services.chat_service import ChatService
from services.proxy import ProxyService
from services.stream_service import StreamService
from config import Config
from utils.logger import app_logger

router = APIRouter()


@router.post("/api/chat-stream")
async def chat_stream(request: Request):
    """
    Streaming chat endpoint. The body is a completion request; the response is
    the generated text as it arrives, or a fenced error block.
    """
    try:
        settings = Config.pipeline_settings(request.headers.get("token"))

        body = await request.body()
        if not body:
            raise ValueError("request body is empty, please check it")

        completion_request = ChatCompletionRequest.model_validate(json.loads(body))
        payload = await ChatService.pre_handle_message(settings, completion_request)

        path = request.headers.get("path") or Config.DEFAULT_COMPLETION_PATH
        response = await ProxyService.forward(settings, request.method, path, json.dumps(payload))

        stream = await StreamService.create_stream(response)
        if isinstance(stream, str):
            return PlainTextResponse(stream)

        return StreamingResponse(
            stream,
            media_type="text/plain; charset=utf-8",
            headers={
                "Cache-Control": "no-cache",
                "X-Accel-Buffering": "no"
            }
        )

    except Exception as e:
        app_logger.error(f"[Chat Stream] {e}")
        return PlainTextResponse(StreamService.format_exception_block(e))
