"""Domain Types — identity types and enums shared by the search pipeline.

Invariants:
    - WebsiteId, TechnologyId wrap UUIDs — dedup compares identities, never domain strings
    - All closed vocabularies encoded as str Enums — no raw string matching
    - TechnologyCategory.OTHER is the single home of the "Other" fallback label

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

WebsiteId = NewType("WebsiteId", UUID)
TechnologyId = NewType("TechnologyId", UUID)


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100
MAX_SUGGESTIONS = 5

# Largest OFFSET a SQL backend accepts (signed 64-bit)
MAX_OFFSET = 2**63 - 1

# Tried in this order when the query is a bare name ("shopify" -> "shopify.com")
COMMON_TLDS: tuple[str, ...] = (".com", ".org", ".net", ".io", ".co", ".ai", ".app")


# ─── Enums ───────────────────────────────────────────────────────

class PlanKind(str, Enum):
    """Which retrieval strategies a query resolves to. Value is the debug searchType."""
    COMBINED = "combined"
    TECHNOLOGY = "technology"
    CATEGORY = "category"
    DEFAULT = "default"


class Provenance(str, Enum):
    """Strategy that produced a candidate."""
    DOMAIN = "domain"
    TECHNOLOGY = "technology"
    CATEGORY = "category"
    DEFAULT = "default"


class SortField(str, Enum):
    """Sort keys accepted by the `sort` query parameter."""
    URL = "url"
    LAST_SCRAPED = "last_scraped"
    LOAD_TIME = "load_time"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TechnologyCategory(str, Enum):
    """Curated category labels assigned at ingestion. Categories are matched case-sensitively."""
    JAVASCRIPT_FRAMEWORK = "JavaScript Framework"
    CSS_FRAMEWORK = "CSS Framework"
    CONTENT_MANAGEMENT = "Content Management"
    ANALYTICS = "Analytics"
    CDN = "CDN"
    E_COMMERCE = "E-commerce"
    DEVELOPMENT_TOOL = "Development Tool"
    UI_LIBRARY = "UI Library"
    MONITORING = "Monitoring"
    PERFORMANCE = "Performance"
    JAVASCRIPT_LIBRARY = "JavaScript Library"
    OTHER = "Other"
