"""Stream decoding for the assistant's chat endpoint.

Reassembles ``data: `` framed lines from arbitrarily split byte chunks and
maps each one to a Fragment or the terminal Done event. Malformed lines
are dropped, never raised.
"""

from etf_chat.parsing.sse_decoder import (
    DATA_PREFIX,
    DONE_SENTINEL,
    SSEDecoder,
    iter_events,
    parse_line,
)

__all__ = ["DATA_PREFIX", "DONE_SENTINEL", "SSEDecoder", "iter_events", "parse_line"]
