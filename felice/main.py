"""Application bootstrap."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

from felice.config import FeliceSettings, get_settings
from felice.logging import configure_logging, logger
from felice.services.controller import SearchSessionController


@asynccontextmanager
async def search_session(
    settings: FeliceSettings | None = None,
) -> AsyncIterator[SearchSessionController]:
    """Yield a controller for one search session backed by a shared HTTP client."""

    settings = settings or get_settings()
    configure_logging(settings.log_level)
    if settings.bing.api_key is None:
        logger.warning("bing_api_key_missing")

    async with httpx.AsyncClient() as client:
        controller = SearchSessionController.from_settings(client, settings)
        logger.info(
            "search_session_started",
            page_size=settings.bing.results_per_page,
            blocked_keywords=len(settings.filters.blocked_keywords),
            blocked_domains=len(settings.filters.blocked_domains),
        )
        yield controller


__all__ = ["search_session"]
