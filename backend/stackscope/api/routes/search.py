"""Search Route — GET /api/v1/search, the hybrid domain/technology search.

Invariants:
    - Every query parameter is accepted as a raw string and coerced; malformed
      values never produce a 4xx
    - Store failures propagate as DatabaseError (500 envelope via global handler)
"""

import logging

from fastapi import APIRouter, Depends, Query

from stackscope.config import get_settings
from stackscope.core.search_params import parse_search_params
from stackscope.infrastructure.website_store import (
    SqlWebsiteStore, get_website_store,
)
from stackscope.schemas.search import (
    PaginationInfo, SearchDebug, SearchResponse, SearchSuggestion, WebsiteResult,
)
from stackscope.services.search_service import SearchOutcome, resolve_search

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["search"])


def _build_response(outcome: SearchOutcome) -> SearchResponse:
    return SearchResponse(
        results=[WebsiteResult.from_candidate(c) for c in outcome.results],
        suggestions=[
            SearchSuggestion.from_suggestion(s) for s in outcome.suggestions
        ],
        pagination=PaginationInfo.from_pagination(outcome.pagination),
        debug=SearchDebug(
            query=(
                outcome.plan.query or outcome.plan.technology_pattern
                or outcome.plan.category
            ),
            original_query=outcome.params.query,
            search_type=outcome.plan.kind.value,
            url_like=outcome.plan.url_like,
            total_found=outcome.total_found,
        ),
    )


@router.get("/search", response_model=SearchResponse)
async def search(
    q: str | None = Query(None),
    tech: str | None = Query(None),
    category: str | None = Query(None),
    sort: str | None = Query(None),
    order: str | None = Query(None),
    page: str | None = Query(None),
    limit: str | None = Query(None),
    responsive: str | None = Query(None),
    https: str | None = Query(None),
    spa: str | None = Query(None),
    service_worker: str | None = Query(None),
    store: SqlWebsiteStore = Depends(get_website_store),
):
    """Search websites by domain, technology name, or category."""
    settings = get_settings()
    params = parse_search_params(
        q=q, tech=tech, category=category, sort=sort, order=order,
        page=page, limit=limit, responsive=responsive, https=https,
        spa=spa, service_worker=service_worker,
        default_limit=settings.search_default_limit,
        max_limit=settings.search_max_limit,
    )
    outcome = await resolve_search(
        store, params, suggestion_limit=settings.search_suggestion_limit,
    )
    return _build_response(outcome)
