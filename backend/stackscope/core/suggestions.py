"""Suggestion Generator — "did you mean" hints for searches that found nothing.

Invariants:
    - Only technology suggestions; at most `limit` of them, in store order
    - Every suggestion's name contains the search term case-insensitively
    - Missing categories are reported as TechnologyCategory.OTHER
"""

from stackscope.core.domain_types import MAX_SUGGESTIONS, TechnologyCategory
from stackscope.core.search_types import Suggestion, TechnologyRecord


def suggestion_hint(name: str) -> str:
    return f"Search for websites using {name}"


def build_suggestions(
    term: str,
    technologies: list[TechnologyRecord],
    limit: int = MAX_SUGGESTIONS,
) -> list[Suggestion]:
    """Turn technology rows into suggestions, dropping any that don't contain `term`."""
    needle = term.strip().lower()
    suggestions: list[Suggestion] = []
    for tech in technologies:
        if len(suggestions) >= limit:
            break
        if needle not in tech.name.lower():
            continue
        suggestions.append(Suggestion(
            name=tech.name,
            category=tech.category or TechnologyCategory.OTHER.value,
            suggestion=suggestion_hint(tech.name),
        ))
    return suggestions
