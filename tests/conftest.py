"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL / Redis.

* ``reservations``, ``admin_users`` and ``log_events`` use the production
  models directly (no PostGIS columns).
* ``stores`` is mirrored by ``TestStoreModel`` with the Geometry column
  replaced by a plain String, and ``_TestStoreRepository`` replaces the
  PostGIS radius query with a haversine filter.
* Redis is replaced by an in-memory session store and the Kakao client by
  an ``AsyncMock``.
"""

from __future__ import annotations

import secrets
import uuid
from datetime import datetime, timedelta
from typing import AsyncGenerator, Optional
from unittest.mock import AsyncMock, patch

import bcrypt
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String, func, select
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from hama.config import Settings
from hama.domain.distance import haversine_km
from hama.domain.entities import StoreNotFound
from hama.infrastructure.database import Base
from hama.infrastructure.models import (
    AdminUserModel,
    LogEventModel,
    ReservationModel,
    UserModel,
)


# ── Test DB (SQLite in-memory) ────────────────────────────────────────

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(TEST_DB_URL, echo=False)
TestSessionFactory = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)

PLAIN_TABLES = [
    ReservationModel.__table__,
    AdminUserModel.__table__,
    LogEventModel.__table__,
    UserModel.__table__,
]

ADMIN_EMAIL = "admin@hama.local"
ADMIN_PASSWORD = "hama1234"

# Osan station
ORIGIN = (37.1452, 127.0668)


class TestBase(DeclarativeBase):
    pass


# Mirrors the production StoreModel without the PostGIS Geometry column
# (SQLite doesn't support it).

class TestStoreModel(TestBase):
    __tablename__ = "stores"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    category = Column(String(40), nullable=False)
    area = Column(String(80), nullable=True)
    address = Column(String(255), nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    location = Column(String, nullable=True)  # stub for Geometry
    phone = Column(String(40), nullable=True)
    image_url = Column(String(500), nullable=True)
    cover_image_url = Column(String(500), nullable=True)
    kakao_place_url = Column(String(500), nullable=True)
    distance_hint = Column(String(80), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    mood = Column(String(120), nullable=True)
    tags = Column(JSON, nullable=True)
    with_kids = Column(Boolean, nullable=True)
    for_work = Column(Boolean, nullable=True)
    price_level = Column(Integer, nullable=True)
    owner_id = Column(String(64), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now())


class _TestStoreRepository:
    """Mirrors ``StoreRepository`` but uses the SQLite-friendly test model."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, store_id: str):
        return await self.session.get(TestStoreModel, store_id)

    async def get_active(self, limit: Optional[int] = None):
        query = select(TestStoreModel).where(TestStoreModel.is_active.is_(True))
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_named_by_category(self, category: str, limit: int):
        result = await self.session.execute(
            select(TestStoreModel)
            .where(
                TestStoreModel.category == category,
                TestStoreModel.name.is_not(None),
                TestStoreModel.name != "",
            )
            .order_by(TestStoreModel.created_at.desc(), TestStoreModel.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_nearby(self, lat, lng, radius_m, limit=50):
        stores = await self.get_active()
        near = [
            s for s in stores
            if haversine_km(lat, lng, s.lat, s.lng) * 1000 <= radius_m
        ]
        return near[:limit]

    async def search_by_name(self, q: str, limit: int, owner_id=None):
        query = select(TestStoreModel).order_by(TestStoreModel.name).limit(limit)
        if owner_id is not None:
            query = query.where(TestStoreModel.owner_id == owner_id)
        if q:
            query = query.where(TestStoreModel.name.ilike(f"%{q}%"))
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update_cover_image(self, store_id: str, cover_image_url):
        store = await self.get_by_id(store_id)
        if store is None:
            raise StoreNotFound(store_id)
        store.cover_image_url = cover_image_url
        await self.session.flush()
        return store

    async def set_owner(self, store_id: str, owner_id):
        store = await self.get_by_id(store_id)
        if store is None:
            raise StoreNotFound(store_id)
        store.owner_id = owner_id
        await self.session.flush()
        return store


class InMemorySessionStore:
    """Stands in for the Redis-backed ``AdminSessionStore``."""

    def __init__(self):
        self.tokens: dict[str, str] = {}

    async def create(self, admin_id: str) -> str:
        token = secrets.token_urlsafe(16)
        self.tokens[token] = admin_id
        return token

    async def resolve(self, token):
        if not token:
            return None
        return self.tokens.get(token)

    async def revoke(self, token) -> None:
        self.tokens.pop(token, None)


def make_kakao(configured: bool = True) -> AsyncMock:
    kakao = AsyncMock()
    kakao.configured = configured
    kakao.keyword_search = AsyncMock(return_value={"documents": [{"id": "1"}]})
    kakao.coord_to_region = AsyncMock(
        return_value={"documents": [{"region_type": "H", "code": "4137051000"}]}
    )
    return kakao


def make_settings(**overrides) -> Settings:
    values = {
        "kakao_rest_api_key": "test-rest-key",
        "kakao_redirect_uri": "http://localhost:3000/api/auth/kakao/callback",
        "frontend_base_url": "http://localhost:3000",
    }
    values.update(overrides)
    return Settings(**values)


# ── Seed data ─────────────────────────────────────────────────────────

STORES = [
    {"id": "s-cafe-1", "name": "하마 카페", "category": "cafe", "address": "경기 오산시 오산로 1", "lat": 37.1460, "lng": 127.0672, "owner_id": "owner-1"},
    {"id": "s-cafe-2", "name": "딥브루 카페", "category": "cafe", "address": None, "lat": 37.1700, "lng": 127.0900, "owner_id": "owner-2"},
    {"id": "s-food-1", "name": "골목식당", "category": "restaurant", "address": "경기 오산시 중앙로 33", "lat": 37.1487, "lng": 127.0701, "owner_id": "owner-1"},
    {"id": "s-salon-1", "name": "메종 헤어", "category": "salon", "address": "경기 오산시 원동로 20", "lat": None, "lng": None},
    {"id": "s-act-1", "name": "물향기 수목원", "category": "activity", "address": "경기 오산시 청학로 211", "lat": 37.1696, "lng": 127.0557},
    {"id": "s-closed", "name": "닫힌 카페", "category": "cafe", "address": "경기 오산시", "lat": 37.1453, "lng": 127.0669, "is_active": False},
]

USERS = [
    {"id": "owner-1", "nickname": "하마사장"},
    {"id": "owner-2", "nickname": "딥브루사장"},
    {"id": "guest-1", "nickname": "손님"},
]

RESERVATION_BASE_TIME = datetime(2026, 10, 1, 12, 0, 0)

RESERVATIONS = [
    {"id": "r-old", "store": "골목식당", "address": "중앙로 33", "name": "김하마", "people": 2, "date": "2026-11-01", "time": "18:30"},
    {"id": "r-mid", "store": "메종 헤어", "address": "원동로 20", "name": "이하마", "people": 1, "date": "2026-11-02", "time": "11:00"},
    {"id": "r-new", "store": "하마 카페", "address": "오산로 1", "name": "박하마", "people": 4, "date": "2026-11-03", "time": "14:00"},
]


async def _create_tables() -> None:
    async with test_engine.begin() as conn:
        await conn.run_sync(TestBase.metadata.create_all)
        await conn.run_sync(Base.metadata.create_all, tables=PLAIN_TABLES)


async def _drop_tables() -> None:
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all, tables=PLAIN_TABLES)
        await conn.run_sync(TestBase.metadata.drop_all)


async def _seed() -> None:
    async with TestSessionFactory() as session:
        for i, s in enumerate(STORES):
            session.add(
                TestStoreModel(created_at=RESERVATION_BASE_TIME + timedelta(minutes=i), **s)
            )
        for i, u in enumerate(USERS):
            session.add(
                UserModel(updated_at=RESERVATION_BASE_TIME + timedelta(days=i), **u)
            )
        for i, r in enumerate(RESERVATIONS):
            session.add(
                ReservationModel(
                    created_at=RESERVATION_BASE_TIME + timedelta(hours=i), **r
                )
            )
        session.add(
            AdminUserModel(
                email=ADMIN_EMAIL,
                name="관리자",
                password_hash=bcrypt.hashpw(
                    ADMIN_PASSWORD.encode(), bcrypt.gensalt(rounds=4)
                ).decode(),
            )
        )
        await session.commit()


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield a session, then drop everything."""
    await _create_tables()

    async with TestSessionFactory() as session:
        yield session

    await _drop_tables()


@pytest_asyncio.fixture
async def app():
    """FastAPI app wired to SQLite, in-memory sessions and a fake Kakao."""
    await _create_tables()
    await _seed()

    route_modules = ("search", "stores", "partner", "admin")
    patches = [
        patch(f"hama.api.routes.{m}.StoreRepository", _TestStoreRepository)
        for m in route_modules
    ]
    for p in patches:
        p.start()

    async def _test_db():
        async with TestSessionFactory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    from hama.api.app import create_app
    from hama.api.dependencies import get_db
    from hama.api.middleware import limiter

    limiter.reset()

    application = create_app(make_settings())
    application.dependency_overrides[get_db] = _test_db
    application.state.sessions = InMemorySessionStore()
    application.state.kakao = make_kakao()

    yield application

    for p in patches:
        p.stop()
    await _drop_tables()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient) -> AsyncClient:
    """``client`` with a logged-in admin session cookie."""
    resp = await client.post(
        "/api/admin/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert resp.status_code == 200
    return client


@pytest_asyncio.fixture
async def session_factory(app):
    """Session factory bound to the same database the app uses."""
    return TestSessionFactory
