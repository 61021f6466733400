"""Search session state and the pure transitions that drive it.

Every user action maps to a function taking the current :class:`SearchSession`
and returning the next one. Actions that need a fetch also return the
:class:`SearchRequest` to dispatch; the caller reports the outcome back through
:func:`resolve_success` or :func:`resolve_failure`.

Each request carries the session's ``latest_request_id`` at the time it was
issued. Outcomes for any older request are ignored, so the last request
issued wins even when responses arrive out of order.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field

from felice.config import RESULTS_PER_PAGE
from felice.domain.models import (
    SearchCategory,
    SearchPage,
    SearchRequest,
    SearchResult,
    SessionStatus,
)


class SearchSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str = ""
    category: SearchCategory = "web"
    current_page: int = Field(default=1, ge=1)
    total_results: int = Field(default=0, ge=0)
    results: tuple[SearchResult, ...] = ()
    status: SessionStatus = "idle"
    error_message: str | None = None
    has_searched: bool = False
    latest_request_id: int = Field(default=0, ge=0)
    page_size: int = Field(default=RESULTS_PER_PAGE, ge=1)

    @property
    def page_count(self) -> int:
        if self.total_results <= 0:
            return 0
        return math.ceil(self.total_results / self.page_size)

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.page_count

    @property
    def is_loading(self) -> bool:
        return self.status == "loading"

    def is_valid_page(self, page: int) -> bool:
        return 1 <= page <= self.page_count


Transition = tuple[SearchSession, SearchRequest | None]


def edit_query(session: SearchSession, text: str) -> SearchSession:
    if text == session.query:
        return session
    return session.model_copy(update={"query": text})


def submit_search(session: SearchSession) -> Transition:
    """Search the current category from page 1; blank queries are ignored."""

    if not session.query.strip():
        return session, None
    return _begin(session, session.category, 1)


def switch_category(session: SearchSession, category: SearchCategory) -> Transition:
    """Move to another tab, dropping the old tab's results before fetching."""

    cleared = session.model_copy(
        update={"category": category, "results": (), "current_page": 1}
    )
    if not cleared.query.strip():
        # Nothing to fetch, but any in-flight response belongs to the old tab.
        return (
            cleared.model_copy(
                update={
                    "status": "idle",
                    "error_message": None,
                    "latest_request_id": cleared.latest_request_id + 1,
                }
            ),
            None,
        )
    return _begin(cleared, category, 1)


def change_page(session: SearchSession, page: int) -> Transition:
    """Fetch another page of the current category; out-of-range pages are a no-op."""

    if not session.is_valid_page(page):
        return session, None
    return _begin(session, session.category, page)


def next_page(session: SearchSession) -> Transition:
    return change_page(session, session.current_page + 1)


def previous_page(session: SearchSession) -> Transition:
    return change_page(session, session.current_page - 1)


def is_current(session: SearchSession, request: SearchRequest) -> bool:
    return request.request_id == session.latest_request_id


def resolve_success(
    session: SearchSession, request: SearchRequest, page: SearchPage
) -> SearchSession:
    if not is_current(session, request):
        return session
    return session.model_copy(
        update={
            "results": page.results,
            "total_results": page.total_results,
            "current_page": request.page,
            "has_searched": True,
            "status": "idle",
            "error_message": None,
        }
    )


def resolve_failure(session: SearchSession, request: SearchRequest, message: str) -> SearchSession:
    """Record a failed fetch while keeping the last good page on screen."""

    if not is_current(session, request):
        return session
    return session.model_copy(update={"status": "error", "error_message": message})


def _begin(session: SearchSession, category: SearchCategory, page: int) -> Transition:
    request_id = session.latest_request_id + 1
    request = SearchRequest(
        request_id=request_id,
        category=category,
        query=session.query,
        page=page,
    )
    started = session.model_copy(
        update={
            "status": "loading",
            "error_message": None,
            "latest_request_id": request_id,
        }
    )
    return started, request


__all__ = [
    "SearchSession",
    "Transition",
    "change_page",
    "edit_query",
    "is_current",
    "next_page",
    "previous_page",
    "resolve_failure",
    "resolve_success",
    "submit_search",
    "switch_category",
]
