"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deepsearch.agent.chat_agent import get_agent_service
from deepsearch.api.auth import router as auth_router
from deepsearch.api.chat import router as chat_router
from deepsearch.api.dependencies import get_session_resolver

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.

    Raises:
        ValueError: If API keys or auth secrets are not configured.
    """
    logger.info("Starting Deepsearch API...")
    # Missing API keys or auth secrets fail startup, not the first request
    get_session_resolver()
    get_agent_service()
    logger.info("Agent and session resolver ready")
    yield
    logger.info("Shutting down Deepsearch API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Deepsearch API",
        description=(
            "Web chat API backed by a language model that searches the web "
            "and cites its sources. Streams text, tool calls and tool results "
            "as Server-Sent Events."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(auth_router)
    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "deepsearch"}

    return application


app = create_app()
