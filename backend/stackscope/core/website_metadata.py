"""Website Metadata — typed view over the page metadata emitted by the detector.

Invariants:
    - Well-known facets are typed optional fields (bool facets, numeric load time)
    - Unrecognized keys are kept as extras, never dropped
    - to_dict() returns exactly the keys that were present in the stored map

Design Decisions:
    - pydantic extra="allow" as the escape hatch for detector evolution
    - A stored map that fails validation (e.g. is_https="maybe") is kept unvalidated
      rather than failing the whole search
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)


class WebsiteMetadata(BaseModel):
    """Facets the search filters and sorts on, plus whatever else the detector sent."""

    model_config = ConfigDict(extra="allow")

    is_https: bool | None = None
    is_responsive: bool | None = None
    likely_spa: bool | None = None
    has_service_worker: bool | None = None
    page_load_time: float | None = None

    @classmethod
    def from_raw(cls, raw: dict[str, Any] | None) -> "WebsiteMetadata":
        raw = raw or {}
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Metadata kept unvalidated: {e.error_count()} bad field(s)")
            return cls.model_construct(_fields_set=set(raw), **raw)

    @property
    def extras(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    def to_dict(self) -> dict[str, Any]:
        data = {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name in self.model_fields_set
        }
        data.update(self.extras)
        return data
