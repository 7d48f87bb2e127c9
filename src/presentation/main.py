"""
FastAPI Application Entry Point.

This is the main entry point for the MCP Chat Relay API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.application.use_cases.disconnect_server import DisconnectServerUseCase
from src.infrastructure.config.logging_config import setup_logging
from src.infrastructure.config.settings import get_settings
from src.presentation.api.dependencies import get_session_repository
from src.presentation.api.routers import mcp_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    # Startup
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    logger.info("Starting MCP Chat Relay on %s:%s", settings.host, settings.port)
    logger.info("Debug mode: %s", settings.debug)
    if not settings.gemini_api_key:
        logger.error("GEMINI_API_KEY is not set")

    yield

    # Shutdown
    repository = app.dependency_overrides.get(
        get_session_repository, get_session_repository
    )()
    closed = await DisconnectServerUseCase(session_repository=repository).disconnect_all()
    logger.info("Shutting down MCP Chat Relay (%d sessions closed)", closed)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="MCP Chat Relay",
        description="A chat relay between a browser, an LLM and a local MCP server",
        version="1.0.0",
        lifespan=lifespan,
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(mcp_router)

    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "MCP Chat Relay",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health",
            "relay": "/api/mcp",
        }

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.presentation.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
