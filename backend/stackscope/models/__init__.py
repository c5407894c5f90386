"""ORM Models — SQLAlchemy declarative models for the three stored entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Tables are owned by the ingestion side; this service only reads them

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from stackscope.models.website import Website  # noqa: F401
from stackscope.models.technology import Technology  # noqa: F401
from stackscope.models.website_technology import WebsiteTechnology  # noqa: F401
