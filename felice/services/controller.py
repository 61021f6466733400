"""Tie user actions to the dispatch, normalize and filter pipeline."""

from __future__ import annotations

import httpx

from felice.config import FeliceSettings
from felice.domain import session as transitions
from felice.domain.models import SearchCategory, SearchPage, SearchRequest
from felice.domain.session import SearchSession, Transition
from felice.logging import logger
from felice.services.content_filter import ContentFilter
from felice.services.dispatcher import QueryDispatcher
from felice.services.exceptions import NetworkError
from felice.services.normalizer import ResultNormalizer


class SearchSessionController:
    """Owns one :class:`SearchSession` and applies user actions to it.

    Each action method applies the matching pure transition, runs the
    resulting request (if any) through the pipeline, and returns the session
    as it stands afterwards. ``NetworkError`` never escapes; it becomes
    ``status == "error"`` with a generic message.
    """

    def __init__(
        self,
        dispatcher: QueryDispatcher,
        normalizer: ResultNormalizer,
        content_filter: ContentFilter,
        *,
        error_message: str,
        session: SearchSession | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._normalizer = normalizer
        self._filter = content_filter
        self._error_message = error_message
        self._session = session or SearchSession(page_size=dispatcher.page_size)

    @classmethod
    def from_settings(
        cls, http_client: httpx.AsyncClient, settings: FeliceSettings
    ) -> "SearchSessionController":
        return cls(
            QueryDispatcher(http_client, settings=settings.bing),
            ResultNormalizer(settings),
            ContentFilter(settings.filters),
            error_message=settings.error_message,
        )

    @property
    def session(self) -> SearchSession:
        return self._session

    def edit_query(self, text: str) -> SearchSession:
        self._session = transitions.edit_query(self._session, text)
        return self._session

    async def submit_search(self, query: str | None = None) -> SearchSession:
        if query is not None:
            self.edit_query(query)
        return await self._apply(transitions.submit_search(self._session))

    async def switch_category(self, category: SearchCategory) -> SearchSession:
        return await self._apply(transitions.switch_category(self._session, category))

    async def change_page(self, page: int) -> SearchSession:
        return await self._apply(transitions.change_page(self._session, page))

    async def next_page(self) -> SearchSession:
        return await self._apply(transitions.next_page(self._session))

    async def previous_page(self) -> SearchSession:
        return await self._apply(transitions.previous_page(self._session))

    async def _apply(self, transition: Transition) -> SearchSession:
        self._session, request = transition
        if request is not None:
            await self._run(request)
        return self._session

    async def _run(self, request: SearchRequest) -> None:
        try:
            page = await self._fetch_page(request)
        except NetworkError as exc:
            logger.error(
                "search_dispatch_failed",
                request_id=request.request_id,
                category=request.category,
                page=request.page,
                error=str(exc),
            )
            if not self._is_stale(request):
                self._session = transitions.resolve_failure(
                    self._session, request, self._error_message
                )
            return

        if not self._is_stale(request):
            self._session = transitions.resolve_success(self._session, request, page)

    async def _fetch_page(self, request: SearchRequest) -> SearchPage:
        payload = await self._dispatcher.dispatch(request.category, request.query, request.page)
        page = self._normalizer.normalize_response(payload, request.category)
        return page.model_copy(update={"results": self._filter.filter(page.results)})

    def _is_stale(self, request: SearchRequest) -> bool:
        if transitions.is_current(self._session, request):
            return False
        logger.info(
            "stale_search_response_discarded",
            request_id=request.request_id,
            latest_request_id=self._session.latest_request_id,
        )
        return True


__all__ = ["SearchSessionController"]
