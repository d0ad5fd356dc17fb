"""
Models package exports.
"""
from models.api_models import Message, SessionMsg, ChatCompletionRequest, Analysis
from models.chat_models import PipelineSettings, Document, RequestKind, StreamEventType, StreamEvent

__all__ = [
    'Message',
    'SessionMsg',
    'ChatCompletionRequest',
    'Analysis',
    'PipelineSettings',
    'Document',
    'RequestKind',
    'StreamEventType',
    'StreamEvent'
]
