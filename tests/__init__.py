"""Test package for the ETF chat client.

Structure:
    - unit/: Decoder, stores, configuration, transport and controller tests
    - integration/: Client and controller against a fake streaming backend

Leverages pytest with pytest-asyncio (auto mode) and pytest-check for soft
assertions. HTTP traffic goes through httpx MockTransport or ASGITransport,
so no network is required.
"""
