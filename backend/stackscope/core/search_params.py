"""Search Parameter Coercion — raw query-string values to SearchParams.

Invariants:
    - Never raises: malformed input is coerced to defaults silently
    - page >= 1; 1 <= limit <= max_limit
    - (page - 1) * limit never exceeds MAX_OFFSET: larger pages are clamped, and
      land past the last row like any other out-of-range page
    - Unknown sort/order values fall back to last_scraped / desc
    - Facet values other than "true"/"false" impose no constraint
"""

from stackscope.core.domain_types import (
    DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, MAX_OFFSET, SortField, SortOrder,
)
from stackscope.core.search_types import MetadataFilter, SearchParams, SortSpec


def _parse_int(raw: str | None, default: int) -> int:
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return default


def _parse_facet(raw: str | None) -> bool | None:
    value = (raw or "").strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def parse_sort(sort: str | None, order: str | None) -> SortSpec:
    try:
        field = SortField((sort or "").strip().lower())
    except ValueError:
        field = SortField.LAST_SCRAPED
    try:
        direction = SortOrder((order or "").strip().lower())
    except ValueError:
        direction = SortOrder.DESC
    return SortSpec(field=field, order=direction)


def parse_metadata_filter(
    responsive: str | None = None,
    https: str | None = None,
    spa: str | None = None,
    service_worker: str | None = None,
) -> MetadataFilter:
    return MetadataFilter(
        responsive=_parse_facet(responsive),
        https=_parse_facet(https),
        spa=_parse_facet(spa),
        service_worker=_parse_facet(service_worker),
    )


def parse_search_params(
    q: str | None = None,
    tech: str | None = None,
    category: str | None = None,
    sort: str | None = None,
    order: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    responsive: str | None = None,
    https: str | None = None,
    spa: str | None = None,
    service_worker: str | None = None,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> SearchParams:
    """Coerce raw query-string values into SearchParams."""
    page_number = max(_parse_int(page, DEFAULT_PAGE), 1)
    page_size = _parse_int(limit, default_limit)
    if page_size < 1:
        page_size = default_limit
    page_size = min(page_size, max_limit)
    page_number = min(page_number, MAX_OFFSET // page_size)

    return SearchParams(
        query=q or "",
        tech=tech or "",
        category=category or "",
        sort=parse_sort(sort, order),
        page=page_number,
        limit=page_size,
        filters=parse_metadata_filter(responsive, https, spa, service_worker),
    )
