"""
Shared fixtures.

Every test gets its own in-memory SQLite database and upload directory; the
FastAPI dependencies are overridden to use them.
"""
import os
import tempfile

# Must be set before the application modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="inventory-uploads-"))

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from inventory_api.infra.local_storage import LocalStorageAdapter
from inventory_api.lib.database import get_db, init_db
from inventory_api.main import app
from inventory_api.models import Building, Company, FloorPlan
from inventory_api.services.storage_service import StorageService, get_storage


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def upload_root(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def storage(upload_root):
    return StorageService(storage=LocalStorageAdapter(root=str(upload_root)))


@pytest_asyncio.fixture
async def client(session_factory, storage):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def building(db):
    company = Company(name="Buildup Investment")
    db.add(company)
    await db.flush()

    building = Building(
        company_id=company.id,
        name="Tower A",
        address="12 Rustaveli Ave",
        desktop_paths={},
        mobile_paths={},
    )
    db.add(building)
    await db.commit()
    return building


@pytest.fixture
def make_floor_plan(db, building):
    """Factory for floor plans in the default building."""

    async def _make(
        name="Type A",
        floor_range_start=2,
        floor_range_end=4,
        starting_apartment_number=101,
        apartments_per_floor=2,
        building_id=None,
    ):
        floor_plan = FloorPlan(
            building_id=building_id or building.id,
            name=name,
            desktop_paths={},
            mobile_paths={},
            floor_range_start=floor_range_start,
            floor_range_end=floor_range_end,
            starting_apartment_number=starting_apartment_number,
            apartments_per_floor=apartments_per_floor,
        )
        db.add(floor_plan)
        await db.commit()
        return floor_plan

    return _make


@pytest_asyncio.fixture
async def floor_plan(make_floor_plan):
    """Floors 2-4, two apartments per floor, numbered from 101."""
    return await make_floor_plan()
