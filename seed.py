"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations:
    python seed.py

Creates:
  - the dashboard admin (admin@hama.local / hama1234), if missing
  - 8 sample stores around Osan (cafes, restaurants, a salon, activities)
  - 3 sample reservations
  - 2 app users who own some of the sample stores
"""

import asyncio

import bcrypt
from sqlalchemy import text

from hama.domain.enums import AdminRole, StoreCategory
from hama.infrastructure.database import async_session_factory, engine
from hama.infrastructure.repositories import (
    AdminUserRepository,
    ReservationRepository,
    StoreRepository,
    UserRepository,
)

ADMIN_EMAIL = "admin@hama.local"
ADMIN_PASSWORD = "hama1234"

# Osan station (approx)
CENTER_LAT, CENTER_LNG = 37.1452, 127.0668


STORES = [
    {"name": "하마 카페", "category": StoreCategory.CAFE, "area": "오산", "address": "경기 오산시 오산로 1", "lat": 37.1460, "lng": 127.0672, "image_url": "/images/cafe1.jpg", "mood": "조용한 작업 카페", "for_work": True, "owner_id": "kakao-1001"},
    {"name": "딥브루 카페", "category": StoreCategory.CAFE, "area": "오산", "address": "경기 오산시 역광장로 12", "lat": 37.1441, "lng": 127.0655, "image_url": "/images/cafe2.jpg", "tags": ["디저트", "브런치"]},
    {"name": "골목식당", "category": StoreCategory.RESTAURANT, "area": "오산", "address": "경기 오산시 중앙로 33", "lat": 37.1487, "lng": 127.0701, "image_url": "/images/restaurant1.jpg", "price_level": 2, "owner_id": "kakao-1001"},
    {"name": "오산 국밥집", "category": StoreCategory.RESTAURANT, "area": "오산", "address": "경기 오산시 시장길 5", "lat": 37.1502, "lng": 127.0633, "with_kids": True, "price_level": 1},
    {"name": "메종 헤어", "category": StoreCategory.SALON, "area": "오산", "address": "경기 오산시 원동로 20", "lat": 37.1418, "lng": 127.0690, "image_url": "/images/hair1.jpg", "owner_id": "kakao-1002"},
    {"name": "물향기 수목원", "category": StoreCategory.ACTIVITY, "area": "오산", "address": "경기 오산시 청학로 211", "lat": 37.1696, "lng": 127.0557, "with_kids": True},
    {"name": "오산 클라이밍", "category": StoreCategory.ACTIVITY, "area": "오산", "address": "경기 오산시 성호대로 88", "lat": 37.1523, "lng": 127.0745},
    # No coordinates yet: sorts last in distance views
    {"name": "스타벅스 오산점", "category": StoreCategory.CAFE, "area": "오산", "address": "경기 오산시 ...", "lat": None, "lng": None},
]

USERS = [
    {"id": "kakao-1001", "nickname": "하마사장"},
    {"id": "kakao-1002", "nickname": "메종원장"},
]

RESERVATIONS = [
    {"store": "골목식당", "address": "경기 오산시 중앙로 33", "name": "김하마", "phone": "010-0000-0001", "people": 2, "date": "2026-11-01", "time": "18:30"},
    {"store": "메종 헤어", "address": "경기 오산시 원동로 20", "name": "이하마", "phone": "010-0000-0002", "people": 1, "date": "2026-11-02", "time": "11:00", "note": "커트"},
    {"store": "하마 카페", "address": "경기 오산시 오산로 1", "name": "박하마", "phone": "", "people": 4, "date": "2026-11-03", "time": "14:00"},
]


async def seed():
    async with async_session_factory() as session:
        # ── Admin (upsert-like: create only when missing) ────────────
        admins = AdminUserRepository(session)
        if await admins.get_by_email(ADMIN_EMAIL) is None:
            password_hash = bcrypt.hashpw(
                ADMIN_PASSWORD.encode(), bcrypt.gensalt(rounds=10)
            ).decode()
            await admins.create(
                email=ADMIN_EMAIL,
                name="관리자",
                password_hash=password_hash,
                role=AdminRole.ADMIN.value,
            )
        print(f"  Admin user ready: {ADMIN_EMAIL}")

        # Check if sample data already exists
        result = await session.execute(text("SELECT count(*) FROM stores"))
        if result.scalar() > 0:
            await session.commit()
            print("Stores already seeded. Skipping sample data.")
            return

        # ── Users (store owners) ──────────────────────────────────────
        users = UserRepository(session)
        for u in USERS:
            await users.create(**u)
        print(f"  Created {len(USERS)} users")

        # ── Stores ────────────────────────────────────────────────────
        stores = StoreRepository(session)
        for s in STORES:
            fields = dict(s)
            fields["category"] = fields["category"].value
            await stores.create_store(**fields)
        print(f"  Created {len(STORES)} stores")

        # ── Reservations ──────────────────────────────────────────────
        reservations = ReservationRepository(session)
        for r in RESERVATIONS:
            await reservations.create(**r)
        print(f"  Created {len(RESERVATIONS)} reservations")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
