"""Search Types — per-request value objects flowing through the resolution pipeline.

Invariants:
    - All records are frozen: built fresh per request from store rows, never mutated
    - WebsiteRecord.domain is already normalized by the store
    - StoreResult.total is the strategy's own count (filters applied), independent of the page slice

Design Decisions:
    - Plain dataclasses in core, pydantic only at the API boundary (schemas/)
"""

from dataclasses import dataclass, field
from datetime import datetime

from stackscope.core.domain_types import (
    WebsiteId, TechnologyId, Provenance, SortField, SortOrder,
)
from stackscope.core.website_metadata import WebsiteMetadata


@dataclass(frozen=True)
class TechnologyRecord:
    id: TechnologyId
    name: str
    category: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class WebsiteRecord:
    id: WebsiteId
    domain: str
    last_scraped: datetime | None
    metadata: WebsiteMetadata
    technologies: tuple[TechnologyRecord, ...] = ()
    created_at: datetime | None = None


@dataclass(frozen=True)
class Candidate:
    """A website surfaced by one strategy, tagged with where it came from."""
    website: WebsiteRecord
    provenance: Provenance

    @property
    def id(self) -> WebsiteId:
        return self.website.id


@dataclass(frozen=True)
class StoreResult:
    records: list[WebsiteRecord]
    total: int


@dataclass(frozen=True)
class PageRequest:
    offset: int
    limit: int


@dataclass(frozen=True)
class SortSpec:
    field: SortField = SortField.LAST_SCRAPED
    order: SortOrder = SortOrder.DESC

    @property
    def ascending(self) -> bool:
        return self.order == SortOrder.ASC


@dataclass(frozen=True)
class MetadataFilter:
    """Facet constraints; None means the facet is unconstrained."""
    responsive: bool | None = None
    https: bool | None = None
    spa: bool | None = None
    service_worker: bool | None = None

    def constraints(self) -> dict[str, bool]:
        """Map of metadata key -> required boolean, only for constrained facets."""
        pairs = {
            "is_responsive": self.responsive,
            "is_https": self.https,
            "likely_spa": self.spa,
            "has_service_worker": self.service_worker,
        }
        return {key: value for key, value in pairs.items() if value is not None}


@dataclass(frozen=True)
class DomainMatchTerms:
    """Everything the Domain strategy ORs together for one query."""
    substring: str
    exact: tuple[str, ...]
    subdomain_prefix: str


@dataclass(frozen=True)
class Suggestion:
    name: str
    category: str
    suggestion: str
    type: str = "technology"


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int
    total_pages: int


@dataclass(frozen=True)
class SearchParams:
    """Coerced request parameters. Built by core/search_params.parse_search_params."""
    query: str = ""
    tech: str = ""
    category: str = ""
    sort: SortSpec = field(default_factory=SortSpec)
    page: int = 1
    limit: int = 20
    filters: MetadataFilter = field(default_factory=MetadataFilter)
