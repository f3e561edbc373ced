"""
Local place search
==================

GET /api/search?q= -- case-insensitive substring filter over active stores
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hama.api.dependencies import get_db, get_settings
from hama.api.middleware import DEFAULT_LIMIT, limiter
from hama.api.schemas import PlaceResponse, PlaceSearchResponse
from hama.config import Settings
from hama.domain.entities import Place
from hama.domain.search import filter_places
from hama.infrastructure.repositories import StoreRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])


def _to_place(store) -> Place:
    return Place(
        id=str(store.id),
        name=store.name or "",
        category=store.category or "",
        image=store.image_url or "",
        address=store.address,
    )


@router.get(
    "/search",
    response_model=PlaceSearchResponse,
    summary="Filter places by name, category or address",
)
@limiter.limit(DEFAULT_LIMIT)
async def search_places(
    request: Request,
    q: str = "",
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not q.strip():
        return PlaceSearchResponse(results=[])

    try:
        stores = await StoreRepository(db).get_active()
        places = [_to_place(s) for s in stores]
        results = filter_places(places, q, limit=settings.search_result_limit)
    except Exception:
        logger.exception("[GET /api/search] error")
        return JSONResponse({"ok": False, "code": "SERVER_ERROR"}, status_code=500)

    return PlaceSearchResponse(
        results=[PlaceResponse.model_validate(p) for p in results]
    )
