"""Website ORM — one scraped site and the facets detected on it.

Invariants:
    - domain is unique and stored normalized (lowercase, no scheme, no www., no trailing slash)
    - metadata is an open JSON map; the facets the search filters on are
      is_https, is_responsive, likely_spa, has_service_worker, page_load_time
    - technologies loaded eagerly (selectin) with the website, ordered by name

Design Decisions:
    - Python attribute metadata_ maps to column "metadata" (Declarative reserves `metadata`)
    - JSON over JSONB: the same model runs against SQLite in tests
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from stackscope.db.base import Base


class Website(Base):
    """Scraped website."""
    __tablename__ = "websites"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    domain: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    last_scraped: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True,
    )
    metadata_: Mapped[dict] = mapped_column(
        "metadata", JSON, nullable=False, default=dict,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    technologies: Mapped[list["Technology"]] = relationship(
        "Technology", secondary="website_technologies",
        order_by="Technology.name", lazy="selectin",
    )
