"""
Animapper HTTP API - FastAPI application mapping AniList ids to Hianime episodes.

Routes:
    GET /                        service description
    GET /episodes/{anilist_id}   episode listing of an AniList anime
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from animapper.config.loader import get_config
from animapper.config.models.settings import Settings
from animapper.services.episode_mapper import (
    EpisodeMapper,
    LookupStatus,
    parse_anilist_id,
)
from animapper.shared.constants import HTTPStatusCodes
from animapper.shared.errors import DomainError

logger = logging.getLogger(__name__)

ABOUT_MESSAGE = "Simple API to map Anilist IDs to Hianime episode IDs"
INVALID_ID_MESSAGE = "Invalid Anilist ID"
NOT_FOUND_MESSAGE = "Anime not found or no episodes available"
INTERNAL_ERROR_MESSAGE = "Internal server error"

CORS_ALLOWED_HEADERS = ["Origin", "X-Requested-With", "Content-Type", "Accept"]


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def get_episode_mapper(request: Request) -> EpisodeMapper:
    """Dependency that provides the EpisodeMapper stored on the app state."""
    mapper = getattr(request.app.state, "episode_mapper", None)
    if mapper is None:
        logger.error("EpisodeMapper not initialized in app state.")
        raise RuntimeError("EpisodeMapper not available.")
    return mapper


def create_app(
    settings: Settings | None = None,
    mapper: EpisodeMapper | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings (defaults to the global config)
        mapper: Pre-built episode mapper; when omitted one is built from
            settings on startup and closed on shutdown

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owned = mapper is None
        app.state.episode_mapper = mapper or EpisodeMapper.from_settings(settings)
        logger.info("Episode mapper ready")
        try:
            yield
        finally:
            if owned:
                await app.state.episode_mapper.close()
                logger.info("Provider HTTP session closed")

    app = FastAPI(
        title=settings.app.name,
        description=ABOUT_MESSAGE,
        version=settings.app.version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=CORS_ALLOWED_HEADERS,
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Service description."""
        return {
            "about": ABOUT_MESSAGE,
            "status": HTTPStatusCodes.OK,
            "routes": ["/episodes/:anilistId"],
        }

    @app.get("/episodes/{anilist_id}")
    async def get_episodes(
        anilist_id: str,
        episode_mapper: EpisodeMapper = Depends(get_episode_mapper),
    ) -> JSONResponse:
        """Episode listing of an AniList anime."""
        try:
            parsed_id = parse_anilist_id(anilist_id)
        except DomainError:
            return _error_response(HTTPStatusCodes.BAD_REQUEST, INVALID_ID_MESSAGE)

        try:
            outcome = await episode_mapper.get_episodes(parsed_id)
        except Exception:
            logger.exception("Unexpected error resolving AniList id %d", parsed_id)
            return _error_response(HTTPStatusCodes.INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

        if outcome.status is LookupStatus.MATCHED and outcome.response is not None:
            return JSONResponse(content=outcome.response.model_dump(by_alias=True, mode="json"))

        if outcome.status is LookupStatus.NOT_FOUND:
            logger.info("AniList %d: %s", parsed_id, outcome.message)
            return _error_response(HTTPStatusCodes.NOT_FOUND, NOT_FOUND_MESSAGE)

        logger.error("AniList %d lookup failed: %s", parsed_id, outcome.message)
        return _error_response(HTTPStatusCodes.INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    return app
