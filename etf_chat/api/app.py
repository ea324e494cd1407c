"""FastAPI host application for the chat front end.

The NiceGUI pages are mounted onto this app in ``etf_chat.main``.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from etf_chat import __version__

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log application startup and shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting ETF chat front end...")
    yield
    logger.info("Shutting down ETF chat front end...")


def create_app() -> FastAPI:
    """Create and configure the host application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="ETF Chat",
        description="Browser front end for the ETF alert assistant.",
        version=__version__,
        lifespan=lifespan,
    )

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "etf-chat"}

    return application
