"""SQL Website Store — SQLAlchemy implementation of the WebsiteStore protocol.

Invariants:
    - Read-only: no statement issued here writes
    - Metadata filter conditions go into BOTH the rows query and the count query
    - Rows and count queries of one strategy run back to back on ONE session, so a
      combined search holds two pooled connections at a time
    - Technology detail lists at most website_limit sites, with the full count alongside
    - Domain and technology-name matching is case-insensitive; category matching is exact
    - LIKE wildcards in user input are escaped (autoescape), so "%" and "_" match literally

Design Decisions:
    - Technology conditions use EXISTS (relationship.any()) instead of a JOIN:
      no duplicate website rows, so counts and page slices need no DISTINCT
    - Website.id is the final sort key so page slices are stable across requests
"""

import logging
from contextlib import AbstractAsyncContextManager
from typing import Callable

from fastapi import Depends
from sqlalchemy import Select, String, distinct, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from stackscope.core.domain_types import SortField, TechnologyId, WebsiteId
from stackscope.core.search_types import (
    DomainMatchTerms, MetadataFilter, PageRequest, SortSpec, StoreResult,
    TechnologyRecord, WebsiteRecord,
)
from stackscope.core.website_metadata import WebsiteMetadata
from stackscope.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)
from stackscope.models import Technology, Website

logger = logging.getLogger(__name__)

SessionProvider = Callable[[str], AbstractAsyncContextManager[AsyncSession]]


# ─── Row → record conversion ─────────────────────────────────────

def to_technology_record(tech: Technology) -> TechnologyRecord:
    return TechnologyRecord(
        id=TechnologyId(tech.id), name=tech.name, category=tech.category,
        created_at=tech.created_at,
    )


def to_website_record(website: Website) -> WebsiteRecord:
    return WebsiteRecord(
        id=WebsiteId(website.id),
        domain=website.domain,
        last_scraped=website.last_scraped,
        metadata=WebsiteMetadata.from_raw(website.metadata_),
        technologies=tuple(
            to_technology_record(t) for t in website.technologies
        ),
        created_at=website.created_at,
    )


# ─── Statement builders ──────────────────────────────────────────

def metadata_conditions(filters: MetadataFilter) -> list[ColumnElement[bool]]:
    """One equality per constrained facet; unconstrained facets add nothing."""
    return [
        Website.metadata_[key].as_boolean() == expected
        for key, expected in filters.constraints().items()
    ]


def order_by_clauses(sort: SortSpec) -> list:
    if sort.field == SortField.URL:
        column = Website.domain
    elif sort.field == SortField.LOAD_TIME:
        column = Website.metadata_["page_load_time"].as_float()
    else:
        column = Website.last_scraped
    primary = column.asc() if sort.ascending else column.desc()
    return [primary.nulls_last(), Website.id.asc()]


def domain_condition(terms: DomainMatchTerms) -> ColumnElement[bool]:
    domain = func.lower(Website.domain, type_=String)
    return or_(
        domain.contains(terms.substring, autoescape=True),
        domain.in_(terms.exact),
        domain.startswith(terms.subdomain_prefix, autoescape=True),
    )


def technology_name_condition(pattern: str, exact: bool = False) -> ColumnElement[bool]:
    name = func.lower(Technology.name, type_=String)
    needle = pattern.strip().lower()
    if exact:
        return Website.technologies.any(name == needle)
    return Website.technologies.any(name.contains(needle, autoescape=True))


def category_condition(category: str) -> ColumnElement[bool]:
    return Website.technologies.any(Technology.category == category)


class SqlWebsiteStore:
    """WebsiteStore backed by the relational database."""

    def __init__(self, sessions: SessionProvider):
        self._sessions = sessions

    # ─── Strategies ──────────────────────────────────────────────

    async def find_websites_by_domain_pattern(
        self, terms: DomainMatchTerms, filters: MetadataFilter,
        sort: SortSpec, page: PageRequest,
    ) -> StoreResult:
        return await self._find(domain_condition(terms), filters, sort, page)

    async def find_websites_by_technology_pattern(
        self, pattern: str, filters: MetadataFilter,
        sort: SortSpec, page: PageRequest, exact_count: bool = False,
    ) -> StoreResult:
        rows_condition = technology_name_condition(pattern)
        count_condition = (
            technology_name_condition(pattern, exact=True)
            if exact_count else rows_condition
        )
        return await self._find(
            rows_condition, filters, sort, page, count_condition=count_condition,
        )

    async def find_websites_by_category(
        self, category: str, filters: MetadataFilter,
        sort: SortSpec, page: PageRequest,
    ) -> StoreResult:
        return await self._find(category_condition(category), filters, sort, page)

    async def find_websites_default(
        self, filters: MetadataFilter, sort: SortSpec, page: PageRequest,
    ) -> StoreResult:
        return await self._find(None, filters, sort, page)

    async def find_technologies_by_name_substring(
        self, q: str, limit: int = 5,
    ) -> list[TechnologyRecord]:
        needle = q.strip().lower()
        name = func.lower(Technology.name, type_=String)
        stmt = (
            select(Technology)
            .where(name.contains(needle, autoescape=True))
            .limit(limit)
        )
        async with self._sessions("suggest") as db:
            result = await db.execute(stmt)
            return [to_technology_record(t) for t in result.scalars().all()]

    # ─── Detail lookups ──────────────────────────────────────────

    async def get_website(self, website_id: WebsiteId) -> WebsiteRecord | None:
        return await self._load_one(select(Website).where(Website.id == website_id))

    async def get_website_by_domain(self, domain: str) -> WebsiteRecord | None:
        domain_column = func.lower(Website.domain, type_=String)
        return await self._load_one(
            select(Website).where(domain_column == domain.lower()),
        )

    async def get_technology(
        self, technology_id: TechnologyId, website_limit: int = 100,
    ) -> tuple[TechnologyRecord, StoreResult] | None:
        uses_technology = Website.technologies.any(Technology.id == technology_id)
        websites_stmt = (
            select(Website)
            .where(uses_technology)
            .order_by(Website.domain, Website.id)
            .limit(website_limit)
        )
        count_stmt = select(func.count()).select_from(Website).where(uses_technology)

        async with self._sessions("lookup") as db:
            tech = await db.get(Technology, technology_id)
            if tech is None:
                return None
            websites = (await db.execute(websites_stmt)).scalars().all()
            total = (await db.execute(count_stmt)).scalar_one()
            return to_technology_record(tech), StoreResult(
                records=[to_website_record(w) for w in websites], total=int(total),
            )

    async def list_categories(self) -> list[str]:
        stmt = (
            select(distinct(Technology.category))
            .where(Technology.category.is_not(None))
            .order_by(Technology.category)
        )
        async with self._sessions("lookup") as db:
            result = await db.execute(stmt)
            return list(result.scalars().all())

    # ─── Internals ───────────────────────────────────────────────

    async def _find(
        self,
        condition: ColumnElement[bool] | None,
        filters: MetadataFilter,
        sort: SortSpec,
        page: PageRequest,
        count_condition: ColumnElement[bool] | None = None,
    ) -> StoreResult:
        facets = metadata_conditions(filters)
        rows_where = facets + ([condition] if condition is not None else [])
        count_source = count_condition if count_condition is not None else condition
        count_where = facets + ([count_source] if count_source is not None else [])

        rows_stmt = (
            select(Website)
            .where(*rows_where)
            .order_by(*order_by_clauses(sort))
            .offset(page.offset)
            .limit(page.limit)
        )
        count_stmt = select(func.count()).select_from(Website).where(*count_where)

        async with self._sessions("search") as db:
            rows = (await db.execute(rows_stmt)).scalars().all()
            total = int((await db.execute(count_stmt)).scalar_one())
            records = [to_website_record(w) for w in rows]
        logger.debug(
            f"Store page offset={page.offset} limit={page.limit}: "
            f"{len(records)} row(s) of {total}",
        )
        return StoreResult(records=records, total=total)

    async def _load_one(self, stmt: Select) -> WebsiteRecord | None:
        async with self._sessions("lookup") as db:
            result = await db.execute(stmt)
            website = result.scalar_one_or_none()
            return to_website_record(website) if website else None


def get_website_store(
    manager: DatabaseSessionManager = Depends(get_db_manager),
) -> SqlWebsiteStore:
    """FastAPI dependency: a store bound to the process-wide session manager."""
    return SqlWebsiteStore(manager.session)
