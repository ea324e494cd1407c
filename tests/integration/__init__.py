"""Integration tests for the client working against a backend.

Runs the transport client and controller over httpx.ASGITransport against
a small FastAPI app that speaks the same streaming protocol as the real
assistant service.
"""
