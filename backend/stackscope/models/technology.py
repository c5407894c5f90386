"""Technology ORM — a detected framework, library, service or platform.

Invariants:
    - name is unique; matching is case-insensitive, display keeps the stored case
    - category is a curated label, compared case-sensitively; "Other" when unassigned
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from stackscope.core.domain_types import TechnologyCategory
from stackscope.db.base import Base


class Technology(Base):
    """Technology detected on one or more websites."""
    __tablename__ = "technologies"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    category: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True,
        default=TechnologyCategory.OTHER.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
