"""Build and issue Bing search requests for one page of results."""

from __future__ import annotations

import math
from typing import Any

import httpx

from felice.config import RESULTS_PER_PAGE, BingSettings
from felice.domain.models import SearchCategory
from felice.logging import logger
from felice.services.exceptions import NetworkError

SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"


def compute_offset(page: int, page_size: int = RESULTS_PER_PAGE) -> int:
    """Return the zero-based index of the first result on a 1-based page."""

    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    return (page - 1) * page_size


def page_count(total_results: int, page_size: int = RESULTS_PER_PAGE) -> int:
    if total_results <= 0:
        return 0
    return math.ceil(total_results / page_size)


class QueryDispatcher:
    """Stateless client for the web and image search endpoints.

    Failures are not retried; they surface as :class:`NetworkError`.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: BingSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or BingSettings()

    @property
    def page_size(self) -> int:
        return self._settings.results_per_page

    def endpoint_for(self, category: SearchCategory) -> str:
        if category == "images":
            return str(self._settings.image_search_url)
        return str(self._settings.web_search_url)

    def build_params(self, query: str, page: int) -> dict[str, Any]:
        return {
            "q": query,
            "count": self.page_size,
            "offset": compute_offset(page, self.page_size),
        }

    async def dispatch(self, category: SearchCategory, query: str, page: int) -> dict[str, Any]:
        api_key = self._read_api_key()
        if not api_key:
            raise NetworkError("Bing API key is not configured.")

        url = self.endpoint_for(category)
        params = self.build_params(query, page)
        logger.info(
            "search_dispatch",
            category=category,
            page=page,
            offset=params["offset"],
            count=params["count"],
        )

        try:
            response = await self._client.get(
                url,
                params=params,
                headers={SUBSCRIPTION_KEY_HEADER: api_key},
                timeout=self._settings.request_timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = exc.response.text[:500] if exc.response is not None else str(exc)
            status_code = exc.response.status_code if exc.response is not None else "unknown"
            raise NetworkError(f"Search request failed ({status_code}): {detail}") from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"Search request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise NetworkError("Search response is not valid JSON.") from exc
        if not isinstance(data, dict):
            raise NetworkError("Search response format is invalid.")
        return data

    def _read_api_key(self) -> str | None:
        secret = self._settings.api_key
        if not secret:
            return None
        return secret.get_secret_value().strip() or None


__all__ = [
    "QueryDispatcher",
    "SUBSCRIPTION_KEY_HEADER",
    "compute_offset",
    "page_count",
]
