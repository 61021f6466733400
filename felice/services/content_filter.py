"""Keyword and domain blocklist filtering for normalized results."""

from __future__ import annotations

from typing import Iterable

from felice.config import FilterSettings
from felice.domain.models import SearchResult
from felice.logging import logger
from felice.utils.urls import extract_hostname


class ContentFilter:
    """Drops results whose text or host appears on a blocklist.

    Keywords match as case-insensitive substrings of the title or snippet.
    Domains match the link hostname exactly, so ``sub.example.com`` is not
    caught by an ``example.com`` entry. A link without a parsable hostname is
    excluded.
    """

    def __init__(self, settings: FilterSettings | None = None) -> None:
        self._settings = settings or FilterSettings()
        self._keywords = tuple(keyword.casefold() for keyword in self._settings.blocked_keywords)
        self._domains = frozenset(self._settings.blocked_domains)

    def filter(self, results: Iterable[SearchResult]) -> tuple[SearchResult, ...]:
        kept: list[SearchResult] = []
        blocked = 0
        for result in results:
            if self.is_allowed(result):
                kept.append(result)
            else:
                blocked += 1
        if blocked:
            logger.info("search_results_filtered", blocked=blocked, kept=len(kept))
        return tuple(kept)

    def is_allowed(self, result: SearchResult) -> bool:
        if self.contains_blocked_keyword(result.name) or self.contains_blocked_keyword(
            result.snippet
        ):
            return False
        return not self.is_domain_blocked(result.url)

    def contains_blocked_keyword(self, text: str | None) -> bool:
        if not text:
            return False
        lowered = text.casefold()
        return any(keyword in lowered for keyword in self._keywords)

    def is_domain_blocked(self, link: str | None) -> bool:
        hostname = extract_hostname(link)
        if hostname is None:
            return True
        return hostname in self._domains


__all__ = ["ContentFilter"]
