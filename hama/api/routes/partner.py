"""
Partner (store owner) endpoints
===============================

GET   /api/partner/stores?q=        -- the caller's own stores
PATCH /api/partner/stores/{id}      -- set / clear the cover image
GET   /api/partner/stats?store_id=  -- event counts for one of the caller's stores

The owner id comes from the ``hama_user_id`` cookie set by the partner app.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hama.api.dependencies import get_db
from hama.api.middleware import DEFAULT_LIMIT, limiter
from hama.api.schemas import (
    CoverImageRequest,
    PartnerStatsResponse,
    StoreCoverResponse,
    StoreListResponse,
    StoreSummary,
)
from hama.domain.identity import PARTNER_COOKIE
from hama.domain.stats import STAT_EVENT_TYPES, stats_from_counts
from hama.infrastructure.repositories import LogEventRepository, StoreRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/partner", tags=["partner"])

STORE_LIMIT_DEFAULT = 20
STORE_LIMIT_MAX = 50

LOGIN_REQUIRED = {"error": "로그인이 필요해요"}


@router.get("/stores", response_model=StoreListResponse, summary="My stores")
@limiter.limit(DEFAULT_LIMIT)
async def my_stores(
    request: Request,
    q: str = "",
    limit: int = STORE_LIMIT_DEFAULT,
    owner_id: Optional[str] = Cookie(None, alias=PARTNER_COOKIE),
    db: AsyncSession = Depends(get_db),
):
    if not owner_id:
        return JSONResponse(LOGIN_REQUIRED, status_code=401)

    limit = min(limit if limit > 0 else STORE_LIMIT_DEFAULT, STORE_LIMIT_MAX)
    try:
        rows = await StoreRepository(db).search_by_name(
            q.strip(), limit, owner_id=owner_id
        )
    except Exception:
        logger.exception("[partner/stores]")
        return StoreListResponse(stores=[])
    return StoreListResponse(stores=[StoreSummary.model_validate(s) for s in rows])


@router.patch(
    "/stores/{store_id}",
    response_model=StoreCoverResponse,
    summary="Update a store's cover image",
    responses={
        400: {"description": "cover_image_url missing from the body."},
        401: {"description": "Not logged in."},
        403: {"description": "The store belongs to someone else."},
    },
)
@limiter.limit(DEFAULT_LIMIT)
async def update_cover_image(
    request: Request,
    store_id: str,
    body: CoverImageRequest,
    owner_id: Optional[str] = Cookie(None, alias=PARTNER_COOKIE),
    db: AsyncSession = Depends(get_db),
):
    if not owner_id:
        return JSONResponse(LOGIN_REQUIRED, status_code=401)

    repo = StoreRepository(db)
    store = await repo.get_by_id(store_id)
    if store is None or store.owner_id != owner_id:
        return JSONResponse(
            {"error": "이 매장을 수정할 권한이 없어요"}, status_code=403
        )

    if "cover_image_url" not in body.model_fields_set:
        return JSONResponse({"error": "cover_image_url 필요해요"}, status_code=400)

    cover = (body.cover_image_url or "").strip() or None
    try:
        store = await repo.update_cover_image(store_id, cover)
    except Exception:
        logger.exception("[partner/stores PATCH]")
        return JSONResponse(
            {"error": "대표 이미지를 저장할 수 없어요"}, status_code=500
        )
    return StoreCoverResponse.model_validate(store)


@router.get(
    "/stats",
    response_model=PartnerStatsResponse,
    summary="Event counts for one of my stores",
    responses={
        400: {"description": "store_id missing."},
        401: {"description": "Not logged in."},
        403: {"description": "The store belongs to someone else."},
    },
)
@limiter.limit(DEFAULT_LIMIT)
async def store_stats(
    request: Request,
    store_id: str = "",
    owner_id: Optional[str] = Cookie(None, alias=PARTNER_COOKIE),
    db: AsyncSession = Depends(get_db),
):
    if not owner_id:
        return JSONResponse(LOGIN_REQUIRED, status_code=401)
    if not store_id:
        return JSONResponse({"error": "store_id required"}, status_code=400)

    try:
        store = await StoreRepository(db).get_by_id(store_id)
        if store is None or store.owner_id != owner_id:
            return JSONResponse(
                {"error": "이 매장의 통계를 볼 권한이 없어요"}, status_code=403
            )
        counts = await LogEventRepository(db).count_for_store(
            store_id, STAT_EVENT_TYPES
        )
    except Exception:
        logger.exception("[partner/stats]")
        return JSONResponse({"error": "Failed to fetch stats"}, status_code=500)

    stats = stats_from_counts(counts)
    return PartnerStatsResponse(
        store_id=store_id,
        store_name=store.name,
        store_category=store.category,
        card_views=stats.card_views,
        naver_clicks=stats.naver_clicks,
        kakao_clicks=stats.kakao_clicks,
        detail_actions=stats.detail_actions,
        search_clicks=stats.search_clicks,
        total_clicks=stats.total_clicks,
    )
