"""Marvel Gateway API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly, in priority order; the catch-all goes last
    - Global error handlers map GatewayError → {"message": ...} JSON responses
    - CORS configured from settings (not hardcoded) and wraps every response, 500s included
    - Paths normalised before routing: prefixes case-insensitive, one trailing slash optional
    - Each app instance owns one CharacterStore and one MarvelAPIClient on app.state

Design Decisions:
    - create_app() factory: tests build isolated apps with a mock upstream transport
    - Lifespan over @app.on_event: logging set up on startup, upstream client closed on shutdown
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marvel_gateway.api.error_handlers import register_error_handlers
from marvel_gateway.api.middleware import PathNormalizationMiddleware, UnhandledErrorMiddleware
from marvel_gateway.api.routes import characters, comics, root
from marvel_gateway.config import Settings, get_settings
from marvel_gateway.core.character_store import CharacterStore
from marvel_gateway.infrastructure.marvel_client import MarvelAPIClient
from marvel_gateway.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Server started on port {settings.port}")
    yield
    await app.state.marvel_client.aclose()
    logger.info("Marvel Gateway shutting down")


def create_app(
    settings: Settings | None = None,
    upstream_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the gateway with a fresh local store."""
    settings = settings or get_settings()

    app = FastAPI(title="Marvel Gateway", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.character_store = CharacterStore()
    app.state.marvel_client = MarvelAPIClient(
        base_url=settings.upstream_base_url,
        api_key=settings.api_key,
        timeout_seconds=settings.upstream_timeout_seconds,
        transport=upstream_transport,
    )

    # Last added runs first: path rewrite, then CORS, then the 500 conversion
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(PathNormalizationMiddleware)

    # Order matters: fallback_router matches everything
    app.include_router(characters.router)
    app.include_router(comics.router)
    app.include_router(root.router)
    app.include_router(root.fallback_router)

    register_error_handlers(app)
    return app


app = create_app()
