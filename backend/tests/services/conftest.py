"""Service test fixtures - async DB + FastAPI test client + seed rows.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe hits the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features are not exercised here)
    - StaticPool: one shared connection so every session sees the same in-memory DB
    - Seed fixtures write ORM rows directly; routes are exercised only by the test itself
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from campaign_hub.db.base import Base
from campaign_hub.infrastructure.database import get_db, DatabaseSessionManager
import campaign_hub.infrastructure.database as db_module
from campaign_hub.main import app
from campaign_hub.models.admin import Admin
from campaign_hub.models.campaign import Campaign
from campaign_hub.models.campaign_phase import CampaignPhase
from campaign_hub.models.influencer import Influencer


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Seed rows ───────────────────────────────────────────────────

async def _save(db, row):
    db.add(row)
    await db.commit()
    await db.refresh(row)
    return row


@pytest.fixture
async def seed_admin(test_db):
    return await _save(test_db, Admin(email="ops@brand.test", name="Ops"))


@pytest.fixture
async def seed_campaign(test_db):
    """Active campaign: 5000+ followers, Austin, fashion."""
    return await _save(test_db, Campaign(
        title="Spring Collection",
        description="Launch posts",
        min_followers=5000,
        city="Austin",
        categories=["fashion"],
        status="active",
    ))


@pytest.fixture
async def seed_influencer(test_db):
    """Influencer who qualifies for seed_campaign."""
    return await _save(test_db, Influencer(
        email="ana@creators.test",
        name="Ana",
        instagram="@ana",
        follower_count=10000,
        city="Austin",
        categories=["fashion", "travel"],
    ))


@pytest.fixture
async def seed_phases(test_db, seed_campaign):
    """Phase 1 (1000) and phase 2 (2000), both active."""
    phases = [
        CampaignPhase(
            campaign_id=seed_campaign.id, phase_number=1,
            budget_amount=1000, is_active=True,
        ),
        CampaignPhase(
            campaign_id=seed_campaign.id, phase_number=2,
            budget_amount=2000, is_active=True,
        ),
    ]
    test_db.add_all(phases)
    await test_db.commit()
    return phases
