"""Service test fixtures — async DB, seeded catalog, store and FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - db_manager patched with a manager bound to the test engine; the store
      dependency and the readiness probe both read it at call time
    - seed() inserts websites with their technologies in one commit and
      returns them keyed by domain

Design Decisions:
    - File-backed SQLite instead of :memory: — the store opens one session per
      concurrent query, and each pooled connection to :memory: would see its
      own empty database
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from stackscope.db.base import Base
from stackscope.db.session import create_session_factory
from stackscope.infrastructure.database import DatabaseSessionManager
from stackscope.infrastructure.website_store import SqlWebsiteStore
from stackscope.models import Technology, Website
import stackscope.infrastructure.database as db_module
from stackscope.main import app

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine_and_factory(tmp_path):
    engine, factory = create_session_factory(
        f"sqlite+aiosqlite:///{tmp_path / 'stackscope.db'}",
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine, factory
    await engine.dispose()


@pytest.fixture
async def test_engine(test_engine_and_factory):
    return test_engine_and_factory[0]


@pytest.fixture
async def test_session_factory(test_engine_and_factory):
    return test_engine_and_factory[1]


@pytest.fixture
async def test_manager(test_engine, test_session_factory):
    """DatabaseSessionManager wired to the test engine (no pool settings)."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def store(test_manager):
    return SqlWebsiteStore(test_manager.session)


@pytest.fixture
async def client(test_manager):
    """FastAPI test client with db_manager patched to the test database."""
    original_manager = db_module.db_manager
    db_module.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    db_module.db_manager = original_manager


@pytest.fixture
def seed(test_session_factory):
    """Insert websites. Each site: {"domain", "technologies", "metadata", "minutes"}.

    technologies is a list of names or (name, category) pairs; technologies are
    shared across sites by name. "minutes" offsets last_scraped from BASE_TIME
    (defaults to the site's position, so later entries are more recent).
    """

    async def _seed(sites: list[dict]) -> dict[str, Website]:
        async with test_session_factory() as db:
            techs: dict[str, Technology] = {}
            websites: dict[str, Website] = {}
            for i, site in enumerate(sites):
                linked = []
                for entry in site.get("technologies", []):
                    name, category = (
                        entry if isinstance(entry, tuple) else (entry, "Other")
                    )
                    if name not in techs:
                        techs[name] = Technology(name=name, category=category)
                    linked.append(techs[name])
                website = Website(
                    domain=site["domain"],
                    last_scraped=BASE_TIME + timedelta(minutes=site.get("minutes", i)),
                    metadata_=site.get("metadata", {}),
                    technologies=linked,
                )
                db.add(website)
                websites[site["domain"]] = website
            for tech in techs.values():
                db.add(tech)
            await db.commit()
            return websites

    return _seed


@pytest.fixture
async def drop_tables(test_engine):
    """Drop every table so any store query fails like an unavailable database."""

    async def _drop():
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    return _drop
