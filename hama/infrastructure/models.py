"""
SQLAlchemy ORM models  (maps to PostgreSQL + PostGIS).

Tables
------
* ``stores``        -- places shown in search / home / partner dashboard
* ``reservations``  -- reservation requests, managed from the admin dashboard
* ``admin_users``   -- dashboard operators (bcrypt password hashes)
* ``users``         -- app users (Kakao sign-in); store owners are users
* ``log_events``    -- client-side analytics events

Indexes
-------
* **GIST** on ``stores.location`` for radius queries.
* **B-Tree** on ``stores.category``, ``stores.owner_id``, ``stores.is_active``,
  ``reservations.created_at`` and the reservation slot columns used by the
  duplicate check.
"""

import uuid

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
    func,
)
from geoalchemy2 import Geometry

from .database import Base
from hama.domain.enums import AdminRole


def _uuid() -> str:
    return str(uuid.uuid4())


class StoreModel(Base):
    __tablename__ = "stores"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(200), nullable=False)
    category = Column(String(40), nullable=False)
    area = Column(String(80), nullable=True)
    address = Column(String(255), nullable=True)

    # Plain floats for reads / haversine, geometry for spatial queries
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    location = Column(
        Geometry("POINT", srid=4326, spatial_index=False), nullable=True
    )

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

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_stores_location", "location", postgresql_using="gist"),
        Index("idx_stores_category", "category"),
        Index("idx_stores_owner", "owner_id"),
        Index("idx_stores_active", "is_active"),
    )


class ReservationModel(Base):
    __tablename__ = "reservations"

    id = Column(String(36), primary_key=True, default=_uuid)
    store = Column(String(200), nullable=False)
    address = Column(String(255), nullable=False)
    phone = Column(String(40), nullable=False, default="")
    name = Column(String(120), nullable=False)
    people = Column(Integer, nullable=False, default=1)
    date = Column(String(20), nullable=False)
    time = Column(String(20), nullable=False)
    note = Column(Text, nullable=False, default="")
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_reservations_created", "created_at"),
        Index("idx_reservations_slot", "store", "date", "time"),
    )


class AdminUserModel(Base):
    __tablename__ = "admin_users"

    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(120), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), default=AdminRole.ADMIN.value, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class LogEventModel(Base):
    __tablename__ = "log_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(80), nullable=False)
    data = Column(JSON, nullable=True)
    ts = Column(BigInteger, nullable=True)  # client epoch millis
    visitor_id = Column(String(120), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("idx_log_events_type", "type"),)


class UserModel(Base):
    __tablename__ = "users"

    # Kakao user id, also stored in stores.owner_id
    id = Column(String(64), primary_key=True)
    nickname = Column(String(120), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (Index("idx_users_updated", "updated_at"),)
