"""Query Classifier — decides which retrieval strategies a search request runs.

Invariants:
    - Precedence: category > tech > free-text query > default
    - Blank or whitespace-only inputs count as absent; nothing here raises
    - A free-text query always runs BOTH Domain and Technology strategies
    - url_like is advisory: reported in the debug block, never changes the plan
    - suggestion_term is set only for query-driven plans (combined, technology)
"""

from dataclasses import dataclass

from stackscope.core.domain_types import PlanKind
from stackscope.core.normalize_domain import domain_match_terms, is_url_like
from stackscope.core.search_types import DomainMatchTerms


@dataclass(frozen=True)
class RetrievalPlan:
    kind: PlanKind
    query: str = ""
    technology_pattern: str = ""
    category: str = ""
    domain_terms: DomainMatchTerms | None = None
    url_like: bool = False

    @property
    def suggestion_term(self) -> str | None:
        """Text the Suggestion Generator matches against, or None when not eligible."""
        if self.kind in (PlanKind.COMBINED, PlanKind.TECHNOLOGY):
            return self.technology_pattern or None
        return None


def classify_query(query: str = "", tech: str = "", category: str = "") -> RetrievalPlan:
    """Pick the retrieval plan for one request."""
    category = (category or "").strip()
    if category:
        return RetrievalPlan(kind=PlanKind.CATEGORY, category=category)

    tech = (tech or "").strip()
    if tech:
        return RetrievalPlan(kind=PlanKind.TECHNOLOGY, technology_pattern=tech)

    cleaned = (query or "").strip().lower()
    if cleaned:
        return RetrievalPlan(
            kind=PlanKind.COMBINED,
            query=cleaned,
            technology_pattern=cleaned,
            domain_terms=domain_match_terms(cleaned),
            url_like=is_url_like(cleaned),
        )

    return RetrievalPlan(kind=PlanKind.DEFAULT)
