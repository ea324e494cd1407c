"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Line framing, sentinel handling, chunk boundaries
    - stores/: Snapshot mutation and observer notification
    - api/: Header composition and failure translation
    - chat/: Configuration and the send/stream cycle

Uses httpx.MockTransport in place of the backend.
"""
