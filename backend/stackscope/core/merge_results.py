"""Result Merger — ordered, deduplicated union of Domain and Technology candidates.

Invariants:
    - Every Domain candidate precedes every Technology-only candidate
    - No two output entries share a website identity
    - Output length <= limit
    - Pure and sequential: runs after all concurrent fetches have completed
"""

from stackscope.core.domain_types import Provenance, WebsiteId
from stackscope.core.search_types import Candidate, WebsiteRecord


def tag_candidates(
    records: list[WebsiteRecord], provenance: Provenance,
) -> list[Candidate]:
    return [Candidate(website=record, provenance=provenance) for record in records]


def merge_candidates(
    domain_records: list[WebsiteRecord],
    technology_records: list[WebsiteRecord],
    limit: int,
) -> list[Candidate]:
    """Domain matches first, then unseen technology matches until `limit` is reached."""
    merged: list[Candidate] = []
    seen: set[WebsiteId] = set()

    for record in domain_records:
        if len(merged) >= limit:
            break
        if record.id in seen:
            continue
        seen.add(record.id)
        merged.append(Candidate(website=record, provenance=Provenance.DOMAIN))

    for record in technology_records:
        if len(merged) >= limit:
            break
        if record.id in seen:
            continue
        seen.add(record.id)
        merged.append(Candidate(website=record, provenance=Provenance.TECHNOLOGY))

    return merged
