"""Paginator — page offsets and totals across single and combined strategies.

Invariants:
    - total_pages == ceil(total / limit), and 0 when total == 0
    - total >= number of results on the page (reconcile_total floor)
    - A page whose offset is at or past the total is out of range
    - Out-of-range pages are not errors: empty results, totals unchanged

Design Decisions:
    - Combined total is max(domain_count, technology_count), not the overlap-corrected
      union. Exact overlap would need a full extra join; the approximation is
      monotonic non-decreasing as either side grows and pagination UIs rely on that.
    - reconcile_total floors the reported count at the rows shown on the page.
      It only changes the number when a strategy's count query is narrower than
      its row query (exact-name count with substring rows) or when a combined
      page shows more distinct sites than either count alone.
"""

import math

from stackscope.core.search_types import PageRequest, Pagination


def page_request(page: int, limit: int) -> PageRequest:
    return PageRequest(offset=(page - 1) * limit, limit=limit)


def combined_total(domain_count: int, technology_count: int) -> int:
    return max(domain_count, technology_count)


def reconcile_total(reported: int, shown: int) -> int:
    return max(reported, shown)


def is_out_of_range(page: PageRequest, total: int) -> bool:
    return page.offset > 0 and page.offset >= total


def total_pages(total: int, limit: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / limit)


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    return Pagination(
        page=page, limit=limit, total=total,
        total_pages=total_pages(total, limit),
    )
