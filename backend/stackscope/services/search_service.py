"""Search Resolution — classify, fetch, merge, paginate and suggest for one request.

Invariants:
    - Single pass, stateless: nothing survives the call
    - Combined plan: Domain and Technology fetches run concurrently; the merge
      starts only after both returned, so ordering never depends on timing
    - Any store failure fails the whole request (no partial envelope); pending
      sibling fetches are cancelled
    - Suggestions are fetched only when the page is empty and the plan is query-driven

Design Decisions:
    - Explicit tech: count by exact name, rows by substring; the count is floored
      at the rows shown so total >= len(results) still holds
    - Technology backfill always starts at offset 0; out-of-range combined pages
      return no rows instead of repeating the backfill
"""

import logging
import time
from dataclasses import dataclass

from stackscope.core.classify_query import RetrievalPlan, classify_query
from stackscope.core.domain_types import MAX_SUGGESTIONS, PlanKind, Provenance
from stackscope.core.merge_results import merge_candidates, tag_candidates
from stackscope.core.paginate import (
    build_pagination, combined_total, is_out_of_range, page_request,
    reconcile_total,
)
from stackscope.core.repository_protocols import WebsiteStore
from stackscope.core.search_types import (
    Candidate, PageRequest, Pagination, SearchParams, Suggestion,
)
from stackscope.core.suggestions import build_suggestions
from stackscope.infrastructure.concurrency import gather_or_cancel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchOutcome:
    plan: RetrievalPlan
    params: SearchParams
    results: list[Candidate]
    pagination: Pagination
    suggestions: list[Suggestion]
    total_found: int


async def _retrieve_combined(
    store: WebsiteStore, plan: RetrievalPlan, params: SearchParams, page: PageRequest,
) -> tuple[list[Candidate], int]:
    domain_result, technology_result = await gather_or_cancel(
        store.find_websites_by_domain_pattern(
            plan.domain_terms, params.filters, params.sort, page,
        ),
        store.find_websites_by_technology_pattern(
            plan.technology_pattern, params.filters, params.sort,
            PageRequest(offset=0, limit=page.limit),
        ),
    )
    total = combined_total(domain_result.total, technology_result.total)
    if is_out_of_range(page, total):
        return [], total
    merged = merge_candidates(
        domain_result.records, technology_result.records, page.limit,
    )
    return merged, total


async def _retrieve(
    store: WebsiteStore, plan: RetrievalPlan, params: SearchParams, page: PageRequest,
) -> tuple[list[Candidate], int]:
    """Run the plan's strategies. Returns (page candidates, reported total)."""
    if plan.kind == PlanKind.COMBINED:
        return await _retrieve_combined(store, plan, params, page)

    if plan.kind == PlanKind.CATEGORY:
        result = await store.find_websites_by_category(
            plan.category, params.filters, params.sort, page,
        )
        provenance = Provenance.CATEGORY
    elif plan.kind == PlanKind.TECHNOLOGY:
        result = await store.find_websites_by_technology_pattern(
            plan.technology_pattern, params.filters, params.sort, page,
            exact_count=True,
        )
        provenance = Provenance.TECHNOLOGY
    else:
        result = await store.find_websites_default(
            params.filters, params.sort, page,
        )
        provenance = Provenance.DEFAULT
    return tag_candidates(result.records, provenance), result.total


async def resolve_search(
    store: WebsiteStore,
    params: SearchParams,
    suggestion_limit: int = MAX_SUGGESTIONS,
) -> SearchOutcome:
    """Resolve one search request against the store."""
    started = time.perf_counter()
    plan = classify_query(params.query, params.tech, params.category)
    page = page_request(params.page, params.limit)

    candidates, reported_total = await _retrieve(store, plan, params, page)
    total = reconcile_total(reported_total, len(candidates))
    pagination = build_pagination(params.page, params.limit, total)

    suggestions: list[Suggestion] = []
    term = plan.suggestion_term
    if not candidates and term:
        technologies = await store.find_technologies_by_name_substring(
            term, limit=suggestion_limit,
        )
        suggestions = build_suggestions(term, technologies, suggestion_limit)

    logger.info(
        f"Search resolved: {len(candidates)} result(s), "
        f"{len(suggestions)} suggestion(s)",
        extra={
            "search_type": plan.kind.value,
            "url_like": plan.url_like,
            "total": total,
            "returned": len(candidates),
            "duration_ms": round((time.perf_counter() - started) * 1000, 1),
        },
    )
    return SearchOutcome(
        plan=plan,
        params=params,
        results=candidates,
        pagination=pagination,
        suggestions=suggestions,
        total_found=reported_total,
    )
