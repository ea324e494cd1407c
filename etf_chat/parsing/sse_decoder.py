"""Line-framed stream decoder for the chat endpoint.

Turns raw byte chunks into Fragment/Done events. Each event is one
``data: <payload>`` line; the payload is either the ``[DONE]`` sentinel or
a JSON object carrying a ``content`` field.
"""

import codecs
import json
import logging
from collections.abc import AsyncIterable, AsyncIterator

from etf_chat.models.schemas import Done, Fragment, StreamEvent

logger = logging.getLogger(__name__)

# Constants
DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


def parse_line(line: str) -> StreamEvent | None:
    """Parse a single framed line.

    Malformed input is dropped rather than raised so one bad line never
    terminates the stream.

    Args:
        line: One line of stream text without its newline.

    Returns:
        The decoded event, or None if the line carries no event.
    """
    line = line.removesuffix("\r")
    if not line.startswith(DATA_PREFIX):
        return None

    payload = line[len(DATA_PREFIX) :]
    if payload == DONE_SENTINEL:
        return Done()

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        logger.debug(f"Dropping unparsable stream payload {payload!r}: {e}")
        return None

    if data is None:
        logger.debug("Dropping null stream payload")
        return None
    if not isinstance(data, dict):
        return Fragment(text="")

    content = data.get("content")
    if not content:
        return Fragment(text="")
    return Fragment(text=content if isinstance(content, str) else json.dumps(content))


class SSEDecoder:
    """Incremental decoder that tolerates arbitrary chunk boundaries.

    Bytes are decoded with an incremental UTF-8 decoder so multi-byte
    characters split across chunks survive, and the trailing incomplete
    line is carried over to the next chunk before splitting again.
    """

    def __init__(self) -> None:
        self._text = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def feed(self, chunk: bytes) -> list[StreamEvent]:
        """Decode a chunk and return the events of every completed line."""
        self._buffer += self._text.decode(chunk)
        *lines, self._buffer = self._buffer.split("\n")
        return [event for line in lines if (event := parse_line(line)) is not None]

    def flush(self) -> list[StreamEvent]:
        """Parse whatever unterminated line remains at end of data."""
        tail = self._buffer + self._text.decode(b"", final=True)
        self._buffer = ""
        if not tail:
            return []
        event = parse_line(tail)
        return [event] if event is not None else []


async def iter_events(chunks: AsyncIterable[bytes]) -> AsyncIterator[StreamEvent]:
    """Decode a byte stream into events.

    The sequence ends after yielding Done (no further chunks are read) or
    when the byte stream is exhausted, in which case Done is not emitted.

    Args:
        chunks: Raw byte chunks as delivered by the transport.

    Yields:
        Fragment and Done events in arrival order.
    """
    decoder = SSEDecoder()
    async for chunk in chunks:
        for event in decoder.feed(chunk):
            yield event
            if isinstance(event, Done):
                return

    for event in decoder.flush():
        yield event
