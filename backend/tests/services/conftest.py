"""Service test fixtures — async DB, seeded cities, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_mail_service overridden with a recording fake (no real delivery)
    - auth_headers builds signed bearer tokens carrying a "city" claim

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Background tasks run before the httpx client returns, so notifications
      can be asserted right after the response
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from cityinfo.api.dependencies import get_mail_service
from cityinfo.config import get_settings
from cityinfo.db.base import Base
from cityinfo.infrastructure.city_info_repository import SqlCityInfoRepository
from cityinfo.infrastructure.database import get_db
from cityinfo.infrastructure.tokens import create_access_token
from cityinfo.main import app
from cityinfo.models.city import City
from cityinfo.models.point_of_interest import PointOfInterest


class RecordingMailService:
    """MailService fake that records every (subject, message)."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    async def send(self, subject: str, message: str) -> None:
        self.sent.append((subject, message))


class FailingMailService:
    async def send(self, subject: str, message: str) -> None:
        raise RuntimeError("SMTP relay unreachable")


class RecordingNotifier:
    """Notifier fake for service-level tests."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    def send(self, subject: str, message: str) -> None:
        self.sent.append((subject, message))


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
async def file_session_factory(tmp_path):
    """File-backed SQLite with Antwerp and its Cathedral, both with id 1.

    Sessions from this factory get separate connections, unlike the in-memory
    engine above, so each sees only what the other has committed.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cityinfo.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        session.add(City(
            name="Antwerp",
            points_of_interest=[PointOfInterest(name="Cathedral")],
        ))
        await session.commit()
    yield factory
    await engine.dispose()


@pytest.fixture
def repository(test_db):
    return SqlCityInfoRepository(test_db)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def other_notifier():
    return RecordingNotifier()


@pytest.fixture
def mail_service():
    return RecordingMailService()


@pytest.fixture
def failing_mail_service():
    return FailingMailService()


@pytest.fixture
async def seed_cities(test_db):
    """New York City and Antwerp with two points each; Paris with none."""
    new_york = City(
        name="New York City", description="The one with that big park.",
        points_of_interest=[
            PointOfInterest(
                name="Central Park",
                description="The most visited urban park in the United States.",
            ),
            PointOfInterest(
                name="Empire State Building",
                description="A 102-story skyscraper located in Midtown Manhattan.",
            ),
        ],
    )
    antwerp = City(
        name="Antwerp",
        description="The one with the cathedral that was never really finished.",
        points_of_interest=[
            PointOfInterest(
                name="Cathedral",
                description="A Gothic style cathedral, conceived by architects "
                            "Jan and Pieter Appelmans.",
            ),
            PointOfInterest(
                name="Antwerp Central Station",
                description="The the finest example of railway architecture in Belgium.",
            ),
        ],
    )
    paris = City(name="Paris", description="The one with that big tower.")
    for city in (new_york, antwerp, paris):
        test_db.add(city)
        await test_db.flush()
    await test_db.commit()
    return {"new_york": new_york, "antwerp": antwerp, "paris": paris}


@pytest.fixture
async def client(test_session_factory, mail_service):
    """FastAPI test client with DB and mail dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_service] = lambda: mail_service

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Factory: bearer headers for a caller claiming the given city."""
    def _headers(city: str | None = "Antwerp", **claims) -> dict[str, str]:
        payload = {"sub": "1", "given_name": "Kevin", "family_name": "Dockx", **claims}
        if city is not None:
            payload["city"] = city
        token = create_access_token(payload, get_settings())
        return {"Authorization": f"Bearer {token}"}
    return _headers
