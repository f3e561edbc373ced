"""Initial schema with PostGIS extension and all core tables.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from geoalchemy2 import Geometry


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Enable PostGIS extension
    op.execute("CREATE EXTENSION IF NOT EXISTS postgis")

    # ── stores ────────────────────────────────────────────────────────
    op.create_table(
        "stores",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("category", sa.String(40), nullable=False),
        sa.Column("area", sa.String(80), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("lat", sa.Float, nullable=True),
        sa.Column("lng", sa.Float, nullable=True),
        sa.Column(
            "location",
            Geometry("POINT", srid=4326, spatial_index=False),
            nullable=True,
        ),
        sa.Column("phone", sa.String(40), nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("cover_image_url", sa.String(500), nullable=True),
        sa.Column("kakao_place_url", sa.String(500), nullable=True),
        sa.Column("distance_hint", sa.String(80), nullable=True),
        sa.Column("is_active", sa.Boolean, default=True, nullable=False),
        sa.Column("mood", sa.String(120), nullable=True),
        sa.Column("tags", sa.JSON, nullable=True),
        sa.Column("with_kids", sa.Boolean, nullable=True),
        sa.Column("for_work", sa.Boolean, nullable=True),
        sa.Column("price_level", sa.Integer, nullable=True),
        sa.Column("owner_id", sa.String(64), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "idx_stores_location", "stores", ["location"], postgresql_using="gist"
    )
    op.create_index("idx_stores_category", "stores", ["category"])
    op.create_index("idx_stores_owner", "stores", ["owner_id"])
    op.create_index("idx_stores_active", "stores", ["is_active"])

    # ── reservations ──────────────────────────────────────────────────
    op.create_table(
        "reservations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("store", sa.String(200), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(40), nullable=False, server_default=""),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("people", sa.Integer, nullable=False, server_default="1"),
        sa.Column("date", sa.String(20), nullable=False),
        sa.Column("time", sa.String(20), nullable=False),
        sa.Column("note", sa.Text, nullable=False, server_default=""),
        sa.Column("lat", sa.Float, nullable=True),
        sa.Column("lng", sa.Float, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_reservations_created", "reservations", ["created_at"])
    op.create_index(
        "idx_reservations_slot", "reservations", ["store", "date", "time"]
    )

    # ── admin_users ───────────────────────────────────────────────────
    op.create_table(
        "admin_users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="ADMIN"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )

    # ── log_events ────────────────────────────────────────────────────
    op.create_table(
        "log_events",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("type", sa.String(80), nullable=False),
        sa.Column("data", sa.JSON, nullable=True),
        sa.Column("ts", sa.BigInteger, nullable=True),
        sa.Column("visitor_id", sa.String(120), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_log_events_type", "log_events", ["type"])


def downgrade() -> None:
    op.drop_table("log_events")
    op.drop_table("admin_users")
    op.drop_table("reservations")
    op.drop_table("stores")
