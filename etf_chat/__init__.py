"""ETF Chat Client - streaming front end for the ETF alert assistant.

Combines httpx for streamed HTTP calls, Pydantic for data validation,
NiceGUI for the chat surface, and FastAPI as the hosting app.

Components:
    - api: Transport client and host application
    - parsing: Line-framed stream decoding
    - stores: Conversation state and credentials
    - chat: Send/stream orchestration and configuration
    - ui: Web interface observing the conversation store
    - models: Message, state and payload schemas
"""

__version__ = "0.1.0"
