"""Website Routes — single-website lookups by id and by domain.

Invariants:
    - Domains are normalized before lookup, so "https://www.Example.com/" finds "example.com"
    - Unknown id/domain → 404 RESOURCE_NOT_FOUND envelope
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from stackscope.core.domain_types import WebsiteId
from stackscope.core.errors import ResourceNotFoundError
from stackscope.core.normalize_domain import normalize_domain
from stackscope.infrastructure.website_store import (
    SqlWebsiteStore, get_website_store,
)
from stackscope.schemas.website import WebsiteDetail

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/websites", tags=["websites"])


@router.get("/by-domain/{domain}", response_model=WebsiteDetail)
async def get_website_by_domain(
    domain: str, store: SqlWebsiteStore = Depends(get_website_store),
):
    """Get a website with its technologies and metadata by domain."""
    normalized = normalize_domain(domain)
    record = await store.get_website_by_domain(normalized)
    if record is None:
        raise ResourceNotFoundError("Website", normalized)
    return WebsiteDetail.from_record(record)


@router.get("/{website_id}", response_model=WebsiteDetail)
async def get_website(
    website_id: UUID, store: SqlWebsiteStore = Depends(get_website_store),
):
    """Get a website with its technologies and metadata by id."""
    record = await store.get_website(WebsiteId(website_id))
    if record is None:
        raise ResourceNotFoundError("Website", str(website_id))
    return WebsiteDetail.from_record(record)
