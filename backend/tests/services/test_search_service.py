"""Search resolution tests — pipeline behavior against an in-memory fake store.

Tests cover:
    - Plan dispatch: category, technology (exact count), default, combined
    - Combined: Domain and Technology fetches are concurrent
    - Combined: domain matches ordered first even when they arrive last
    - Combined: technology backfill fetched from offset 0 with the page limit
    - Combined: total is max(domain, technology) counts
    - Combined: out-of-range page returns no rows but keeps totals
    - Partial failure fails the request and cancels the sibling fetch
    - Suggestions only for empty, query-driven results

Design Decisions:
    - FakeStore records every call; per-strategy delays/events make ordering
      and concurrency observable without a database
"""

import asyncio
from uuid import uuid4

import pytest

from stackscope.core.domain_types import PlanKind, Provenance, TechnologyId, WebsiteId
from stackscope.core.errors import DatabaseError
from stackscope.core.search_params import parse_search_params
from stackscope.core.search_types import StoreResult, TechnologyRecord, WebsiteRecord
from stackscope.core.website_metadata import WebsiteMetadata
from stackscope.services.search_service import resolve_search


def _site(domain: str) -> WebsiteRecord:
    return WebsiteRecord(
        id=WebsiteId(uuid4()), domain=domain, last_scraped=None,
        metadata=WebsiteMetadata(),
    )


def _tech(name: str) -> TechnologyRecord:
    return TechnologyRecord(id=TechnologyId(uuid4()), name=name, category="Other")


class FakeStore:
    """Configurable WebsiteStore. Unset strategies return nothing."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.domain = StoreResult([], 0)
        self.technology = StoreResult([], 0)
        self.category = StoreResult([], 0)
        self.default = StoreResult([], 0)
        self.technologies: list[TechnologyRecord] = []
        self.domain_delay = 0.0
        self.technology_error: Exception | None = None
        self.domain_cancelled = False
        self.technology_started = asyncio.Event()
        self.wait_for_technology = False

    async def find_websites_by_domain_pattern(self, terms, filters, sort, page):
        self.calls.append(("domain", terms, page))
        try:
            if self.wait_for_technology:
                await asyncio.wait_for(self.technology_started.wait(), timeout=1)
            await asyncio.sleep(self.domain_delay)
        except asyncio.CancelledError:
            self.domain_cancelled = True
            raise
        return self.domain

    async def find_websites_by_technology_pattern(
        self, pattern, filters, sort, page, exact_count=False,
    ):
        self.calls.append(("technology", pattern, page, exact_count))
        self.technology_started.set()
        if self.technology_error:
            raise self.technology_error
        return self.technology

    async def find_websites_by_category(self, category, filters, sort, page):
        self.calls.append(("category", category, page))
        return self.category

    async def find_websites_default(self, filters, sort, page):
        self.calls.append(("default", page))
        return self.default

    async def find_technologies_by_name_substring(self, q, limit=5):
        self.calls.append(("suggest", q, limit))
        return [t for t in self.technologies if q.lower() in t.name.lower()][:limit]

    def strategies_called(self) -> list[str]:
        return [c[0] for c in self.calls if c[0] != "suggest"]


@pytest.fixture
def fake_store():
    return FakeStore()


# ─── Plan dispatch ───────────────────────────────────────────────

async def test_category_plan_runs_only_category(fake_store):
    fake_store.category = StoreResult([_site("cdn.com")], 1)
    outcome = await resolve_search(
        fake_store, parse_search_params(q="shop", tech="React", category="CDN"),
    )
    assert fake_store.strategies_called() == ["category"]
    assert outcome.plan.kind == PlanKind.CATEGORY
    assert [c.provenance for c in outcome.results] == [Provenance.CATEGORY]


async def test_tech_plan_counts_exact_and_uses_requested_page(fake_store):
    fake_store.technology = StoreResult([_site("a.com")], 1)
    await resolve_search(fake_store, parse_search_params(tech="React", page="3", limit="10"))
    [call] = fake_store.calls
    assert call[0] == "technology"
    assert call[1] == "React"
    assert call[2].offset == 20
    assert call[3] is True


async def test_tech_plan_total_never_below_rows_shown(fake_store):
    fake_store.technology = StoreResult([_site(f"s{i}.com") for i in range(4)], 3)
    outcome = await resolve_search(fake_store, parse_search_params(tech="React"))
    assert len(outcome.results) == 4
    assert outcome.pagination.total == 4
    assert outcome.total_found == 3


async def test_default_plan_for_empty_request(fake_store):
    fake_store.default = StoreResult([_site("recent.com")], 1)
    outcome = await resolve_search(fake_store, parse_search_params(q="   "))
    assert fake_store.strategies_called() == ["default"]
    assert outcome.plan.kind == PlanKind.DEFAULT
    assert outcome.suggestions == []


# ─── Combined plan ───────────────────────────────────────────────

async def test_combined_fetches_run_concurrently(fake_store):
    # The domain fetch blocks until the technology fetch has started
    fake_store.wait_for_technology = True
    fake_store.domain = StoreResult([_site("shop.com")], 1)
    outcome = await resolve_search(fake_store, parse_search_params(q="shop"))
    assert [c.website.domain for c in outcome.results] == ["shop.com"]


async def test_domain_matches_first_even_when_they_arrive_last(fake_store):
    fake_store.domain_delay = 0.05
    fake_store.domain = StoreResult([_site("react.dev")], 1)
    fake_store.technology = StoreResult([_site("uses-react.com"), _site("also.com")], 2)
    outcome = await resolve_search(fake_store, parse_search_params(q="react"))
    assert [c.provenance for c in outcome.results] == [
        Provenance.DOMAIN, Provenance.TECHNOLOGY, Provenance.TECHNOLOGY,
    ]
    assert outcome.results[0].website.domain == "react.dev"


async def test_technology_backfill_starts_at_offset_zero(fake_store):
    fake_store.domain = StoreResult([_site("d.com")], 30)
    await resolve_search(fake_store, parse_search_params(q="shop", page="2", limit="10"))
    domain_call = next(c for c in fake_store.calls if c[0] == "domain")
    tech_call = next(c for c in fake_store.calls if c[0] == "technology")
    assert domain_call[2].offset == 10
    assert tech_call[2].offset == 0
    assert tech_call[2].limit == 10
    assert tech_call[3] is False


async def test_combined_total_is_max_of_counts(fake_store):
    fake_store.domain = StoreResult([_site("a.com")], 7)
    fake_store.technology = StoreResult([_site("b.com")], 12)
    outcome = await resolve_search(fake_store, parse_search_params(q="a", limit="5"))
    assert outcome.pagination.total == 12
    assert outcome.pagination.total_pages == 3


async def test_combined_out_of_range_page_is_empty(fake_store):
    fake_store.technology = StoreResult([_site("b.com")], 3)
    outcome = await resolve_search(fake_store, parse_search_params(q="b", page="5"))
    assert outcome.results == []
    assert outcome.pagination.total == 3
    assert outcome.pagination.total_pages == 1


async def test_combined_results_are_deduplicated(fake_store):
    shared = _site("react.dev")
    fake_store.domain = StoreResult([shared], 1)
    fake_store.technology = StoreResult([shared, _site("x.com")], 2)
    outcome = await resolve_search(fake_store, parse_search_params(q="react"))
    ids = [c.id for c in outcome.results]
    assert len(ids) == len(set(ids)) == 2


# ─── Failure ─────────────────────────────────────────────────────

async def test_partial_failure_fails_request_and_cancels_sibling(fake_store):
    fake_store.domain_delay = 1.0
    fake_store.technology_error = DatabaseError("boom", "query")
    with pytest.raises(DatabaseError):
        await resolve_search(fake_store, parse_search_params(q="react"))
    assert fake_store.domain_cancelled


# ─── Suggestions ─────────────────────────────────────────────────

async def test_suggestions_when_query_finds_nothing(fake_store):
    fake_store.technologies = [_tech("React"), _tech("React Native"), _tech("Vue.js")]
    outcome = await resolve_search(fake_store, parse_search_params(q="Reac"))
    assert [s.name for s in outcome.suggestions] == ["React", "React Native"]
    assert ("suggest", "reac", 5) in fake_store.calls


async def test_typo_without_substring_match_gives_no_suggestions(fake_store):
    fake_store.technologies = [_tech("React")]
    outcome = await resolve_search(fake_store, parse_search_params(q="reakt"))
    assert outcome.results == []
    assert outcome.suggestions == []


async def test_no_suggestions_when_results_exist(fake_store):
    fake_store.technologies = [_tech("React")]
    fake_store.technology = StoreResult([_site("a.com")], 1)
    outcome = await resolve_search(fake_store, parse_search_params(q="react"))
    assert outcome.suggestions == []
    assert "suggest" not in [c[0] for c in fake_store.calls]


async def test_no_suggestions_for_category_plan(fake_store):
    fake_store.technologies = [_tech("CDN Helper")]
    outcome = await resolve_search(fake_store, parse_search_params(category="CDN"))
    assert outcome.results == []
    assert outcome.suggestions == []


async def test_tech_plan_suggests_from_tech_value(fake_store):
    fake_store.technologies = [_tech("Angular"), _tech("AngularJS")]
    outcome = await resolve_search(fake_store, parse_search_params(tech="angul"))
    assert [s.name for s in outcome.suggestions] == ["Angular", "AngularJS"]


async def test_suggestion_limit_is_respected(fake_store):
    fake_store.technologies = [_tech(f"Lib{i}") for i in range(10)]
    outcome = await resolve_search(
        fake_store, parse_search_params(q="lib"), suggestion_limit=3,
    )
    assert len(outcome.suggestions) == 3
