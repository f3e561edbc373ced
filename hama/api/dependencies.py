"""FastAPI dependency injection helpers."""

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from hama.config import Settings
from hama.infrastructure.kakao import KakaoLocalClient
from hama.infrastructure.sessions import AdminSessionStore


async def get_db(request: Request) -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_kakao(request: Request) -> KakaoLocalClient:
    return request.app.state.kakao


def get_session_store(request: Request) -> AdminSessionStore:
    return request.app.state.sessions
