"""
Kakao Local proxies
===================

GET /api/local/search?query=        -- keyword search (raw Kakao JSON)
GET /api/kakao/search?query=        -- alias of the above
GET /api/local/nearby?query=&x=&y=  -- keyword search sorted by distance
GET /api/local/reverse?x=&y=        -- coordinates -> region codes

The REST key never leaves the server.  Upstream failures of any kind
become ``500 {"error": "Failed to fetch"}``.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from hama.api.dependencies import get_kakao
from hama.api.middleware import DEFAULT_LIMIT, limiter
from hama.infrastructure.kakao import KakaoLocalClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["local"])

EMPTY_RESULT = {"documents": []}
DEFAULT_RADIUS_M = 1000


def _missing_key() -> JSONResponse:
    return JSONResponse({"error": "KAKAO_REST_API_KEY missing"}, status_code=500)


async def _proxy(call: Awaitable[Any], label: str) -> Any:
    try:
        return await call
    except (httpx.HTTPError, ValueError):
        logger.exception("[%s] upstream call failed", label)
        return JSONResponse({"error": "Failed to fetch"}, status_code=500)


@router.get("/local/search", summary="Kakao keyword search")
@router.get("/kakao/search", summary="Kakao keyword search (alias)")
@limiter.limit(DEFAULT_LIMIT)
async def keyword_search(
    request: Request,
    query: str = "",
    kakao: KakaoLocalClient = Depends(get_kakao),
):
    if not query.strip():
        return EMPTY_RESULT
    if not kakao.configured:
        return _missing_key()
    return await _proxy(kakao.keyword_search(query), "local/search")


@router.get("/local/nearby", summary="Kakao keyword search around a point")
@limiter.limit(DEFAULT_LIMIT)
async def nearby_search(
    request: Request,
    query: str = "",
    x: str = "",
    y: str = "",
    radius: int = DEFAULT_RADIUS_M,
    kakao: KakaoLocalClient = Depends(get_kakao),
):
    if not query.strip():
        return EMPTY_RESULT
    if not kakao.configured:
        return _missing_key()
    return await _proxy(
        kakao.keyword_search(query, x=x or None, y=y or None, radius=radius),
        "local/nearby",
    )


@router.get("/local/reverse", summary="Reverse geocode to region codes")
@limiter.limit(DEFAULT_LIMIT)
async def reverse_geocode(
    request: Request,
    x: str = "",
    y: str = "",
    kakao: KakaoLocalClient = Depends(get_kakao),
):
    if not kakao.configured:
        return _missing_key()
    return await _proxy(kakao.coord_to_region(x, y), "local/reverse")
