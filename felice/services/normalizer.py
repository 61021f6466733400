"""Convert raw Bing web and image items into uniform search results."""

from __future__ import annotations

from typing import Any, Mapping

from felice.config import FAVICON_SERVICE_URL, FeliceSettings
from felice.domain.models import SearchCategory, SearchPage, SearchResult
from felice.logging import logger
from felice.utils.urls import extract_hostname


class ResultNormalizer:
    """Maps raw API payloads onto :class:`SearchResult` objects.

    Items without a usable link are data-quality noise and are dropped
    without raising.
    """

    def __init__(self, settings: FeliceSettings | None = None) -> None:
        self._favicon_template = (
            settings.favicon_service_url if settings is not None else FAVICON_SERVICE_URL
        )

    def favicon_url(self, link: str | None) -> str | None:
        hostname = extract_hostname(link)
        if hostname is None:
            return None
        return self._favicon_template.format(hostname=hostname)

    def normalize_item(self, raw: Any, category: SearchCategory) -> SearchResult | None:
        if not isinstance(raw, Mapping):
            return None

        content_url = _text(raw.get("contentUrl"))
        link = _text(raw.get("url")) or content_url
        if not link:
            return None

        if category == "images":
            snippet = ""
            thumbnail_url = _text(raw.get("thumbnailUrl"))
        else:
            snippet = _text(raw.get("snippet")) or ""
            thumbnail_url = None

        return SearchResult(
            name=_text(raw.get("name")) or "",
            url=link,
            snippet=snippet,
            display_url=_text(raw.get("displayUrl")) or content_url,
            favicon_url=self.favicon_url(link),
            content_url=content_url,
            thumbnail_url=thumbnail_url,
        )

    def normalize_response(self, payload: Any, category: SearchCategory) -> SearchPage:
        items, total = _unpack(payload, category)
        results = []
        for raw in items:
            result = self.normalize_item(raw, category)
            if result is not None:
                results.append(result)

        dropped = len(items) - len(results)
        if dropped:
            logger.debug("search_items_dropped", category=category, dropped=dropped)
        return SearchPage(results=tuple(results), total_results=total)


def _unpack(payload: Any, category: SearchCategory) -> tuple[list[Any], int]:
    if not isinstance(payload, Mapping):
        return [], 0
    container = payload if category == "images" else payload.get("webPages")
    if not isinstance(container, Mapping):
        return [], 0

    items = container.get("value")
    if not isinstance(items, list):
        items = []
    total = _to_count(payload.get("totalEstimatedMatches")) or _to_count(
        container.get("totalEstimatedMatches")
    )
    return items, total


def _text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _to_count(value: Any) -> int:
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(count, 0)


__all__ = ["ResultNormalizer"]
