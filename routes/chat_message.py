"""
Route handler for building message chains without calling the model.
Handles the /api/chat-message endpoint.
"""
from typing import Optional
from fastapi import APIRouter, Header
from models.api_models import SessionMsg
from services.chat_service import ChatService
from config import Config
from utils.logger import app_logger

router = APIRouter()


@router.post("/api/chat-message")
async def chat_message(session: SessionMsg, token: Optional[str] = Header(None)):
    """
    Return the session as it would be sent upstream, with retrieved context
    when the query carries the augmentation prefix.
    """
    try:
        settings = Config.pipeline_settings(token)
        result = await ChatService.make_chat_messages(settings, session.userMessage, session.recentMessages)
        return result.model_dump(exclude_none=True)
    except Exception as e:
        app_logger.error(f"[Chat] {e}")
        return {"error": str(e)}
