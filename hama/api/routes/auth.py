"""
Kakao OAuth redirects
=====================

GET /api/auth/kakao/login     -- 302 to Kakao's authorize page
GET /api/auth/kakao/callback  -- 302 back to the frontend with a status flag
GET /api/auth/kakao/logout    -- 302 to the frontend home

Token exchange is not performed; the callback only reports whether Kakao
returned an authorization code.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlencode, urljoin

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, RedirectResponse

from hama.api.dependencies import get_settings
from hama.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth/kakao", tags=["auth"])


def authorize_url(settings: Settings) -> str:
    query = urlencode(
        {
            "client_id": settings.kakao_rest_api_key,
            "redirect_uri": settings.kakao_redirect_uri,
            "response_type": "code",
        }
    )
    return f"{settings.kakao_auth_base_url}/oauth/authorize?{query}"


def _frontend_home(settings: Settings, status: str) -> str:
    home = urljoin(settings.frontend_base_url, "/")
    return f"{home}?{urlencode({'kakao_login': status})}"


@router.get("/login", summary="Start Kakao login")
async def kakao_login(settings: Settings = Depends(get_settings)):
    if not settings.kakao_rest_api_key or not settings.kakao_redirect_uri:
        logger.error("Kakao env missing (client id or redirect uri)")
        return PlainTextResponse("Kakao env not set", status_code=500)
    return RedirectResponse(authorize_url(settings), status_code=302)


@router.get("/callback", summary="Kakao login callback")
async def kakao_callback(
    code: Optional[str] = None, settings: Settings = Depends(get_settings)
):
    status = "success" if code else "error"
    return RedirectResponse(_frontend_home(settings, status), status_code=302)


@router.get("/logout", summary="Kakao logout")
async def kakao_logout(settings: Settings = Depends(get_settings)):
    target = settings.logout_redirect_url or settings.frontend_base_url
    return RedirectResponse(target, status_code=302)
