"""WebsiteTechnology ORM — many-to-many link between websites and technologies.

Invariants:
    - Composite primary key (website_id, technology_id): at most one link per pair
    - Links cascade away with either side
"""

import uuid

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from stackscope.db.base import Base


class WebsiteTechnology(Base):
    """Association row; carries no data of its own."""
    __tablename__ = "website_technologies"

    website_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("websites.id", ondelete="CASCADE"),
        primary_key=True,
    )
    technology_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("technologies.id", ondelete="CASCADE"),
        primary_key=True, index=True,
    )
