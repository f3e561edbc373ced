"""
Async SQLAlchemy engines and session factories (asyncpg driver).

``create_app`` builds its own engine from the ``Settings`` it receives.  The
module-level ``engine`` / ``async_session_factory`` use the environment
settings and serve scripts such as ``seed.py``.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from hama.config import Settings, settings


def build_engine(config: Settings) -> AsyncEngine:
    return create_async_engine(
        config.database_url,
        echo=config.database_echo,
        pool_size=config.database_pool_size,
        max_overflow=config.database_max_overflow,
        pool_pre_ping=True,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings)
async_session_factory = build_session_factory(engine)


class Base(DeclarativeBase):
    """Declarative base for stores, reservations, users and log events."""
