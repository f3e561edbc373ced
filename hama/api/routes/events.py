"""
Client event log
================

POST /api/log -- record an analytics event for the current visitor

Visitors without a ``hama_session_id`` cookie get one minted here; it is
never rotated afterwards.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hama.api.dependencies import get_db, get_settings
from hama.api.middleware import DEFAULT_LIMIT, limiter
from hama.api.routes.reservations import error_response
from hama.api.schemas import LogEventRequest, OkResponse
from hama.config import Settings
from hama.domain.identity import (
    SESSION_COOKIE,
    SESSION_COOKIE_MAX_AGE,
    USER_COOKIE,
    new_session_id,
    parse_user_cookie,
    visitor_id,
)
from hama.infrastructure.repositories import LogEventRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


@router.post("/log", response_model=OkResponse, summary="Record a client event")
@limiter.limit(DEFAULT_LIMIT)
async def log_event(
    request: Request,
    body: LogEventRequest,
    session_id: Optional[str] = Cookie(None, alias=SESSION_COOKIE),
    user_cookie: Optional[str] = Cookie(None, alias=USER_COOKIE),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    minted = not session_id
    if minted:
        session_id = new_session_id()

    vid = visitor_id(parse_user_cookie(user_cookie), session_id)
    try:
        await LogEventRepository(db).create(
            type=body.type, data=body.data, ts=body.ts, visitor_id=vid
        )
    except Exception as exc:
        logger.exception("[POST /api/log] error")
        await db.rollback()
        return error_response(exc)

    response = JSONResponse({"ok": True})
    if minted:
        response.set_cookie(
            SESSION_COOKIE,
            session_id,
            max_age=SESSION_COOKIE_MAX_AGE,
            path="/",
            samesite="lax",
            secure=settings.cookie_secure,
        )
    return response
