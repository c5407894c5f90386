"""Domain Normalization — canonical form of website domains and URL-like queries.

Invariants:
    - normalize_domain is idempotent: normalize_domain(normalize_domain(x)) == normalize_domain(x)
    - Normalized form: lowercase, no scheme, no trailing slash, no leading "www."
    - is_url_like is advisory only; it never decides which strategies run

Design Decisions:
    - Strip repeatedly until stable, so inputs like "http://https://www.www.x/"
      still reach a fixed point in one call
"""

import re

from stackscope.core.domain_types import COMMON_TLDS
from stackscope.core.search_types import DomainMatchTerms

_SCHEME = re.compile(r"^[a-z][a-z0-9+.\-]*://")
_WWW = "www."


def _strip_www(value: str) -> str:
    return value[len(_WWW):] if value.startswith(_WWW) else value


def normalize_domain(raw: str) -> str:
    """Lowercase and strip scheme, trailing slashes and a leading www."""
    value = raw.strip().lower()
    while True:
        stripped = _strip_www(_SCHEME.sub("", value).rstrip("/")).strip()
        if stripped == value:
            return value
        value = stripped


def is_url_like(query: str) -> bool:
    """True when the query looks like a domain or URL (dot, slash, or scheme)."""
    q = query.strip().lower()
    return "." in q or "/" in q or bool(_SCHEME.match(q))


def domain_match_terms(query: str) -> DomainMatchTerms:
    """Build the OR-ed match terms for the Domain strategy.

    `query` is the trimmed, lowercased search text. Exact candidates keep the
    fixed TLD order (.com first) so callers can take the first hit.
    """
    cleaned = normalize_domain(query) or query
    exact: list[str] = [query]
    exact.extend(cleaned + tld for tld in COMMON_TLDS)
    exact.append(_strip_www(query))
    return DomainMatchTerms(
        substring=cleaned,
        exact=tuple(dict.fromkeys(exact)),
        subdomain_prefix=cleaned + ".",
    )
