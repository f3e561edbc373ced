"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes
domain-relevant queries only.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from geoalchemy2 import Geography
from sqlalchemy import cast, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import (
    AdminUserModel,
    LogEventModel,
    ReservationModel,
    StoreModel,
    UserModel,
)
from hama.domain.entities import ReservationNotFound, StoreNotFound


class ReservationRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_recent(self) -> list[ReservationModel]:
        """All reservations, newest first (no pagination)."""
        result = await self.session.execute(
            select(ReservationModel).order_by(ReservationModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, reservation_id: str) -> Optional[ReservationModel]:
        return await self.session.get(ReservationModel, reservation_id)

    async def find_slot(
        self, *, store: str, date: str, time: str
    ) -> Optional[ReservationModel]:
        result = await self.session.execute(
            select(ReservationModel)
            .where(
                ReservationModel.store == store,
                ReservationModel.date == date,
                ReservationModel.time == time,
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def create(self, **fields: Any) -> ReservationModel:
        reservation = ReservationModel(**fields)
        self.session.add(reservation)
        await self.session.flush()
        return reservation

    async def delete(self, reservation_id: str) -> None:
        result = await self.session.execute(
            delete(ReservationModel).where(ReservationModel.id == reservation_id)
        )
        if result.rowcount == 0:
            raise ReservationNotFound(
                f"Record to delete does not exist: {reservation_id}"
            )


class StoreRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_store(
        self,
        *,
        name: str,
        category: str,
        lat: float | None = None,
        lng: float | None = None,
        **fields: Any,
    ) -> StoreModel:
        """Create a store, filling the PostGIS point from lat/lng."""
        from geoalchemy2.functions import ST_MakePoint, ST_SetSRID

        location = None
        if lat is not None and lng is not None:
            location = ST_SetSRID(ST_MakePoint(lng, lat), 4326)
        store = StoreModel(
            name=name, category=category, lat=lat, lng=lng, location=location, **fields
        )
        self.session.add(store)
        await self.session.flush()
        return store

    async def get_by_id(self, store_id: str) -> Optional[StoreModel]:
        return await self.session.get(StoreModel, store_id)

    async def get_active(self, limit: int | None = None) -> list[StoreModel]:
        query = select(StoreModel).where(StoreModel.is_active.is_(True))
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_named_by_category(
        self, category: str, limit: int
    ) -> list[StoreModel]:
        """Stores of *category* with a non-empty name, newest first."""
        result = await self.session.execute(
            select(StoreModel)
            .where(
                StoreModel.category == category,
                StoreModel.name.is_not(None),
                StoreModel.name != "",
            )
            .order_by(StoreModel.created_at.desc(), StoreModel.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_nearby(
        self, lat: float, lng: float, radius_m: float, limit: int = 50
    ) -> list[StoreModel]:
        """Active stores within *radius_m* metres (geography distance)."""
        from geoalchemy2.functions import ST_DWithin, ST_MakePoint, ST_SetSRID

        origin = cast(ST_SetSRID(ST_MakePoint(lng, lat), 4326), Geography)
        result = await self.session.execute(
            select(StoreModel)
            .where(
                StoreModel.is_active.is_(True),
                ST_DWithin(cast(StoreModel.location, Geography), origin, radius_m),
            )
            .limit(limit)
        )
        return list(result.scalars().all())

    async def search_by_name(
        self, q: str, limit: int, owner_id: str | None = None
    ) -> list[StoreModel]:
        query = select(StoreModel).order_by(StoreModel.name).limit(limit)
        if owner_id is not None:
            query = query.where(StoreModel.owner_id == owner_id)
        if q:
            query = query.where(StoreModel.name.ilike(f"%{q}%"))
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update_cover_image(
        self, store_id: str, cover_image_url: str | None
    ) -> StoreModel:
        store = await self.get_by_id(store_id)
        if store is None:
            raise StoreNotFound(store_id)
        store.cover_image_url = cover_image_url
        await self.session.flush()
        return store

    async def set_owner(self, store_id: str, owner_id: str | None) -> StoreModel:
        """Assign (or with ``None`` clear) the owning user of a store."""
        store = await self.get_by_id(store_id)
        if store is None:
            raise StoreNotFound(store_id)
        store.owner_id = owner_id
        await self.session.flush()
        return store


class AdminUserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[AdminUserModel]:
        result = await self.session.execute(
            select(AdminUserModel).where(AdminUserModel.email == email)
        )
        return result.scalar_one_or_none()

    async def create(
        self, *, email: str, name: str, password_hash: str, role: str
    ) -> AdminUserModel:
        user = AdminUserModel(
            email=email, name=name, password_hash=password_hash, role=role
        )
        self.session.add(user)
        await self.session.flush()
        return user


class LogEventRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        *,
        type: str,
        data: Any = None,
        ts: int | None = None,
        visitor_id: str | None = None,
    ) -> LogEventModel:
        event = LogEventModel(type=type, data=data, ts=ts, visitor_id=visitor_id)
        self.session.add(event)
        await self.session.flush()
        return event

    async def count_for_store(
        self, store_id: str, types: Iterable[str]
    ) -> dict[str, int]:
        """Number of events per type whose ``data.id`` is *store_id*."""
        result = await self.session.execute(
            select(LogEventModel.type, func.count())
            .where(
                LogEventModel.type.in_(list(types)),
                LogEventModel.data["id"].as_string() == store_id,
            )
            .group_by(LogEventModel.type)
        )
        return {event_type: n for event_type, n in result.all()}


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def search(self, q: str, limit: int) -> list[UserModel]:
        """Users whose nickname contains *q*, most recently active first."""
        query = (
            select(UserModel)
            .order_by(UserModel.updated_at.desc(), UserModel.id)
            .limit(limit)
        )
        if q:
            query = query.where(UserModel.nickname.ilike(f"%{q}%"))
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def create(self, *, id: str, nickname: str | None = None) -> UserModel:
        user = UserModel(id=id, nickname=nickname)
        self.session.add(user)
        await self.session.flush()
        return user
