"""Boundary Protocols — the read-only store contract the search pipeline depends on.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - The store is read-only from this side: no method writes
    - Every find_websites_* returns a StoreResult whose total has the same
      metadata filter applied as its rows

Design Decisions:
    - Protocol over ABC: structural subtyping; tests pass in-memory fakes
    - Async in Protocol: implementations do IO, the pure core never awaits
"""

from typing import Protocol

from stackscope.core.domain_types import TechnologyId, WebsiteId
from stackscope.core.search_types import (
    DomainMatchTerms, MetadataFilter, PageRequest, SortSpec, StoreResult,
    TechnologyRecord, WebsiteRecord,
)


class WebsiteStore(Protocol):
    """Contract for website/technology lookups — implemented by infrastructure."""

    async def find_websites_by_domain_pattern(
        self, terms: DomainMatchTerms, filters: MetadataFilter,
        sort: SortSpec, page: PageRequest,
    ) -> StoreResult: ...

    async def find_websites_by_technology_pattern(
        self, pattern: str, filters: MetadataFilter,
        sort: SortSpec, page: PageRequest, exact_count: bool = False,
    ) -> StoreResult: ...

    async def find_websites_by_category(
        self, category: str, filters: MetadataFilter,
        sort: SortSpec, page: PageRequest,
    ) -> StoreResult: ...

    async def find_websites_default(
        self, filters: MetadataFilter, sort: SortSpec, page: PageRequest,
    ) -> StoreResult: ...

    async def find_technologies_by_name_substring(
        self, q: str, limit: int = 5,
    ) -> list[TechnologyRecord]: ...

    async def get_website(self, website_id: WebsiteId) -> WebsiteRecord | None: ...

    async def get_website_by_domain(self, domain: str) -> WebsiteRecord | None: ...

    async def get_technology(
        self, technology_id: TechnologyId, website_limit: int = 100,
    ) -> tuple[TechnologyRecord, StoreResult] | None:
        """The technology and up to website_limit of its sites; total counts them all."""
        ...

    async def list_categories(self) -> list[str]: ...
