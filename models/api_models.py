"""
Pydantic data models for API requests and responses.
"""
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict


class Message(BaseModel):
    """Chat message model."""
    model_config = ConfigDict(extra="allow")

    role: Literal["system", "user", "assistant"]
    content: str
    date: Optional[str] = None


class SessionMsg(BaseModel):
    """The newest user message plus the turns that precede it."""
    userMessage: Message
    recentMessages: List[Message] = []


class ChatCompletionRequest(BaseModel):
    """Completion request; model parameters other than messages are forwarded untouched."""
    model_config = ConfigDict(extra="allow")

    messages: List[Message]
    model: Optional[str] = None
    stream: Optional[bool] = None


class Analysis(BaseModel):
    """A question/answer pair recorded for later inspection."""
    userMessage: Message
    botMessage: Message
