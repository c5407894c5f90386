"""Technology Routes — category listing and single-technology detail.

Invariants:
    - /categories is registered before /{technology_id} so it is never parsed as an id
    - Unknown technology id → 404 RESOURCE_NOT_FOUND envelope
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from stackscope.config import get_settings
from stackscope.core.domain_types import TechnologyId
from stackscope.core.errors import ResourceNotFoundError
from stackscope.infrastructure.website_store import (
    SqlWebsiteStore, get_website_store,
)
from stackscope.schemas.website import CategoryList, TechnologyDetail

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/technologies", tags=["technologies"])


@router.get("/categories", response_model=CategoryList)
async def list_categories(store: SqlWebsiteStore = Depends(get_website_store)):
    """Distinct technology categories, sorted (feeds the search category filter)."""
    return CategoryList(categories=await store.list_categories())


@router.get("/{technology_id}", response_model=TechnologyDetail)
async def get_technology(
    technology_id: UUID, store: SqlWebsiteStore = Depends(get_website_store),
):
    """Get a technology and the first websites using it, by domain."""
    found = await store.get_technology(
        TechnologyId(technology_id),
        website_limit=get_settings().technology_website_limit,
    )
    if found is None:
        raise ResourceNotFoundError("Technology", str(technology_id))
    record, websites = found
    return TechnologyDetail.from_records(
        record, websites.records, website_count=websites.total,
    )
