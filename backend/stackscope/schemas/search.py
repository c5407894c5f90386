"""Search Schemas — the result envelope returned by GET /api/v1/search.

Invariants:
    - results are in merged order (domain matches before technology-only matches)
    - suggestions is empty whenever results is non-empty
    - pagination.totalPages == ceil(total / limit), 0 when total == 0

Design Decisions:
    - populate_by_name + alias: construct with snake_case, serialize camelCase
    - metadata is emitted as the stored map (known facets and extras alike)
"""

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from stackscope.core.search_types import (
    Candidate, Pagination, Suggestion, TechnologyRecord,
)


class TechnologySummary(BaseModel):
    name: str
    category: str

    @classmethod
    def from_record(cls, record: TechnologyRecord) -> "TechnologySummary":
        return cls(name=record.name, category=record.category)


class WebsiteResult(BaseModel):
    """One row of the results table."""
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    url: str
    technologies: list[TechnologySummary]
    last_scraped: datetime | None = Field(None, alias="lastScraped")
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> "WebsiteResult":
        website = candidate.website
        return cls(
            id=website.id,
            url=website.domain,
            technologies=[
                TechnologySummary.from_record(t) for t in website.technologies
            ],
            last_scraped=website.last_scraped,
            metadata=website.metadata.to_dict(),
        )


class SearchSuggestion(BaseModel):
    type: Literal["technology"] = "technology"
    name: str
    category: str
    suggestion: str

    @classmethod
    def from_suggestion(cls, suggestion: Suggestion) -> "SearchSuggestion":
        return cls(
            name=suggestion.name,
            category=suggestion.category,
            suggestion=suggestion.suggestion,
        )


class PaginationInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")

    @classmethod
    def from_pagination(cls, pagination: Pagination) -> "PaginationInfo":
        return cls(
            page=pagination.page,
            limit=pagination.limit,
            total=pagination.total,
            total_pages=pagination.total_pages,
        )


class SearchDebug(BaseModel):
    """How the query was interpreted; totalFound is the raw strategy count."""
    model_config = ConfigDict(populate_by_name=True)

    query: str
    original_query: str = Field(alias="originalQuery")
    search_type: str = Field(alias="searchType")
    url_like: bool = Field(alias="urlLike")
    total_found: int = Field(alias="totalFound")


class SearchResponse(BaseModel):
    results: list[WebsiteResult]
    suggestions: list[SearchSuggestion] = Field(default_factory=list)
    pagination: PaginationInfo
    debug: SearchDebug | None = None
