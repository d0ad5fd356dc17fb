"""
Streaming service containing the completion stream relay.
Turns the provider's SSE stream into a plain byte stream of generated text.
"""
import codecs
import json
import re
import traceback
from contextlib import aclosing
from typing import AsyncIterator

import httpx

from models.chat_models import StreamEvent, StreamEventType
from utils.constants import Patterns, StreamMarkers
from utils.logger import app_logger
from utils.sse_parser import SSEEvent, SSEParser


class StreamRelayError(RuntimeError):
    pass


class StreamService:
    """Service for relaying completion streams."""

    @staticmethod
    def redact(content: str) -> str:
        """Hide the API key that provider error messages echo back."""
        return re.sub(Patterns.API_KEY_LEAK, Patterns.API_KEY_REDACTED, content, count=1)

    @staticmethod
    def format_error_block(content: str) -> str:
        return "```json\n" + content + "```"

    @staticmethod
    def format_exception_block(error: BaseException) -> str:
        """Render an exception as the fenced JSON block callers display."""
        serialized = {
            "message": str(error),
            "name": type(error).__name__,
            "stack": "".join(traceback.format_exception(type(error), error, error.__traceback__)),
        }
        return "```json\n" + json.dumps(serialized, indent=2) + "\n```"

    @staticmethod
    def is_event_stream(response: httpx.Response) -> bool:
        return "stream" in response.headers.get("content-type", "")

    @staticmethod
    def to_stream_event(sse: SSEEvent) -> StreamEvent:
        """Map one SSE event to DATA, DONE or ERROR."""
        if sse.data == StreamMarkers.DONE:
            return StreamEvent(StreamEventType.DONE)

        try:
            payload = json.loads(sse.data)
            text = payload["choices"][0]["delta"].get("content") or ""
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            return StreamEvent(StreamEventType.ERROR, error=e)

        return StreamEvent(StreamEventType.DATA, text=text)

    @staticmethod
    async def iter_completion_events(chunks: AsyncIterator[bytes]) -> AsyncIterator[StreamEvent]:
        """
        Decode a completion byte stream into typed events.

        Stops right after the first DONE or ERROR event.
        """
        decoder = codecs.getincrementaldecoder("utf-8")()
        parser = SSEParser()

        async for chunk in chunks:
            for sse in parser.feed(decoder.decode(chunk)):
                event = StreamService.to_stream_event(sse)
                yield event
                if event.type is not StreamEventType.DATA:
                    return

        for sse in parser.feed(decoder.decode(b"", final=True)):
            event = StreamService.to_stream_event(sse)
            yield event
            if event.type is not StreamEventType.DATA:
                return

    @staticmethod
    async def relay_stream(response: httpx.Response) -> AsyncIterator[bytes]:
        """
        Yield each delta of the upstream stream as UTF-8 bytes.

        Raises:
            StreamRelayError: an event could not be parsed; the output stream ends there
        """
        try:
            async with aclosing(StreamService.iter_completion_events(response.aiter_bytes())) as events:
                async for event in events:
                    if event.type is StreamEventType.DATA:
                        if event.text:
                            yield event.text.encode("utf-8")
                    elif event.type is StreamEventType.DONE:
                        app_logger.debug("[Stream] done")
                        return
                    else:
                        app_logger.error(f"[Stream] malformed event: {event.error}")
                        raise StreamRelayError(f"Malformed stream event: {event.error}") from event.error

            app_logger.warning("[Stream] upstream closed without [DONE]")
        finally:
            await response.aclose()

    @staticmethod
    async def create_stream(response: httpx.Response) -> str | AsyncIterator[bytes]:
        """
        Relay a provider response.

        Returns:
            A byte iterator for event streams, or the redacted body wrapped in
            a json code fence for anything else (the provider's error path)
        """
        if not StreamService.is_event_stream(response):
            try:
                await response.aread()
            finally:
                await response.aclose()

            content = StreamService.redact(response.text)
            app_logger.error(f"[Stream] error {content}")
            return StreamService.format_error_block(content)

        return StreamService.relay_stream(response)
