"""
Store discovery endpoints
=========================

GET /api/stores/home?lat=&lng=              -- active stores as home cards
GET /api/stores/nearby?lat=&lng=&radius=    -- stores within a radius
GET /api/home-recommend?tab=&count=&lat=&lng=

When an origin is given, cards carry ``distance_km`` and are sorted
nearest first; stores without coordinates go last.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hama.api.dependencies import get_db
from hama.api.middleware import DEFAULT_LIMIT, limiter
from hama.api.schemas import HomeCardListResponse, HomeCardResponse
from hama.domain.categories import store_to_home_card
from hama.domain.distance import sort_by_distance
from hama.domain.recommend import (
    ALL_TAB,
    DEFAULT_ALL_COUNT,
    DEFAULT_TAB_COUNT,
    make_scaled_plan,
    normalize_tab,
    parse_count,
)
from hama.infrastructure.repositories import StoreRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stores"])

HOME_LIMIT = 20
NEARBY_RADIUS_M = 1000
NEARBY_LIMIT = 50


def to_cards(
    stores: Iterable, lat: Optional[float], lng: Optional[float]
) -> list[HomeCardResponse]:
    """Map stores to cards, distance-sorted when an origin is known."""
    if lat is None or lng is None:
        cards = [store_to_home_card(s) for s in stores]
    else:
        cards = [
            store_to_home_card(s, d)
            for s, d in sort_by_distance(stores, lat, lng, lambda s: (s.lat, s.lng))
        ]
    return [HomeCardResponse.model_validate(c) for c in cards]


@router.get(
    "/stores/home",
    response_model=HomeCardListResponse,
    summary="Active stores for the home screen",
)
@limiter.limit(DEFAULT_LIMIT)
async def home_stores(
    request: Request,
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    db: AsyncSession = Depends(get_db),
):
    try:
        stores = await StoreRepository(db).get_active(limit=HOME_LIMIT)
    except Exception as exc:
        logger.exception("[GET /api/stores/home] error")
        return JSONResponse({"items": [], "error": str(exc) or "unknown"}, status_code=500)
    return HomeCardListResponse(items=to_cards(stores, lat, lng))


@router.get(
    "/stores/nearby",
    response_model=HomeCardListResponse,
    summary="Active stores within a radius (metres)",
)
@limiter.limit(DEFAULT_LIMIT)
async def nearby_stores(
    request: Request,
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius: float = Query(NEARBY_RADIUS_M, gt=0, le=20_000),
    db: AsyncSession = Depends(get_db),
):
    try:
        stores = await StoreRepository(db).get_nearby(
            lat, lng, radius, limit=NEARBY_LIMIT
        )
    except Exception as exc:
        logger.exception("[GET /api/stores/nearby] error")
        return JSONResponse({"items": [], "error": str(exc) or "unknown"}, status_code=500)
    return HomeCardListResponse(items=to_cards(stores, lat, lng))


@router.get(
    "/home-recommend",
    response_model=HomeCardListResponse,
    summary="Recommended stores per tab",
    description=(
        "A category tab returns up to ``count`` (default 5) stores of that "
        "category.  The ``all`` tab (default 12) mixes categories 4/4/2/2, "
        "scaled to ``count``."
    ),
)
@limiter.limit(DEFAULT_LIMIT)
async def home_recommend(
    request: Request,
    tab: Optional[str] = None,
    count: Optional[str] = None,
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    db: AsyncSession = Depends(get_db),
):
    tab = normalize_tab(tab)
    n = parse_count(count, DEFAULT_ALL_COUNT if tab == ALL_TAB else DEFAULT_TAB_COUNT)
    logger.info("[home-recommend] tab=%s count=%d", tab, n)

    repo = StoreRepository(db)
    try:
        if tab != ALL_TAB:
            stores = await repo.get_named_by_category(tab, n)
        else:
            stores = []
            for item in make_scaled_plan(n):
                stores.extend(
                    await repo.get_named_by_category(item.category.value, item.n)
                )
            stores = stores[:n]
    except Exception as exc:
        logger.exception("[home-recommend] unexpected error")
        return JSONResponse(
            {"items": [], "error": "failed_to_load", "detail": str(exc)},
            status_code=500,
        )
    return HomeCardListResponse(items=to_cards(stores, lat, lng))
