"""Detail Schemas — single website and single technology views.

Invariants:
    - Technology ids are included here (the detail pages link to them);
      the search envelope omits them
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from stackscope.core.search_types import TechnologyRecord, WebsiteRecord


class TechnologyRef(BaseModel):
    id: UUID
    name: str
    category: str

    @classmethod
    def from_record(cls, record: TechnologyRecord) -> "TechnologyRef":
        return cls(id=record.id, name=record.name, category=record.category)


class WebsiteDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    url: str
    last_scraped: datetime | None = Field(None, alias="lastScraped")
    created_at: datetime | None = Field(None, alias="createdAt")
    metadata: dict[str, Any] = Field(default_factory=dict)
    technologies: list[TechnologyRef]

    @classmethod
    def from_record(cls, record: WebsiteRecord) -> "WebsiteDetail":
        return cls(
            id=record.id,
            url=record.domain,
            last_scraped=record.last_scraped,
            created_at=record.created_at,
            metadata=record.metadata.to_dict(),
            technologies=[TechnologyRef.from_record(t) for t in record.technologies],
        )


class WebsiteRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    url: str
    last_scraped: datetime | None = Field(None, alias="lastScraped")

    @classmethod
    def from_record(cls, record: WebsiteRecord) -> "WebsiteRef":
        return cls(id=record.id, url=record.domain, last_scraped=record.last_scraped)


class TechnologyDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    name: str
    category: str
    created_at: datetime | None = Field(None, alias="createdAt")
    website_count: int = Field(alias="websiteCount")
    websites: list[WebsiteRef]

    @classmethod
    def from_records(
        cls, record: TechnologyRecord, websites: list[WebsiteRecord],
        website_count: int,
    ) -> "TechnologyDetail":
        """websites may be the first few sites using it; website_count counts them all."""
        return cls(
            id=record.id,
            name=record.name,
            category=record.category,
            created_at=record.created_at,
            website_count=website_count,
            websites=[WebsiteRef.from_record(w) for w in websites],
        )


class CategoryList(BaseModel):
    categories: list[str]
