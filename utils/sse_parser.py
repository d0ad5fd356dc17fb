"""
Incremental server-sent event parser.
Accepts decoded text in arbitrary chunks and returns complete events.
"""
import re
from dataclasses import dataclass
from typing import Optional


@dataclass
class SSEEvent:
    """A dispatched server-sent event."""
    data: str
    event: str = "message"
    id: Optional[str] = None


class SSEParser:
    """Parses the text/event-stream line protocol.

    Lines may end with \\n, \\r or \\r\\n and may be split anywhere across
    chunks. An event is dispatched on a blank line; an unterminated event at
    the end of the stream is discarded.
    """

    LINE_END = re.compile(r'\r\n|\r|\n')

    def __init__(self):
        self.buffer = ""
        self.data_lines: list[str] = []
        self.event_type: Optional[str] = None
        self.last_event_id: Optional[str] = None
        self.retry: Optional[int] = None

    def feed(self, chunk: str) -> list[SSEEvent]:
        """Consume a chunk of text and return every event it completes."""
        self.buffer += chunk
        events = []

        while True:
            match = self.LINE_END.search(self.buffer)
            if match is None:
                break

            # A trailing \r may be the first half of \r\n
            if match.group() == '\r' and match.end() == len(self.buffer):
                break

            line = self.buffer[:match.start()]
            self.buffer = self.buffer[match.end():]

            event = self._process_line(line)
            if event is not None:
                events.append(event)

        return events

    def _process_line(self, line: str) -> Optional[SSEEvent]:
        if line == "":
            return self._dispatch()

        if line.startswith(':'):
            return None

        field, _, value = line.partition(':')
        if value.startswith(' '):
            value = value[1:]

        if field == 'data':
            self.data_lines.append(value)
        elif field == 'event':
            self.event_type = value
        elif field == 'id':
            if '\0' not in value:
                self.last_event_id = value
        elif field == 'retry':
            if value.isdigit():
                self.retry = int(value)

        return None

    def _dispatch(self) -> Optional[SSEEvent]:
        if not self.data_lines:
            self.event_type = None
            return None

        event = SSEEvent(
            data="\n".join(self.data_lines),
            event=self.event_type or "message",
            id=self.last_event_id
        )
        self.data_lines = []
        self.event_type = None
        return event

    def reset(self):
        """Reset the parser state."""
        self.buffer = ""
        self.data_lines = []
        self.event_type = None
        self.last_event_id = None
        self.retry = None
