"""
HTTP middleware
===============

* ``limiter`` -- slowapi rate limiter shared by all routers (keyed by
  client address).
* ``AdminGateMiddleware`` -- protects the admin dashboard.  Pages under
  ``/admin`` redirect to ``/admin/login`` without a valid session; the
  ``/api/admin`` JSON endpoints answer 401 instead.  If the session store
  itself fails, both get ``500 {"ok": false, "error": "unknown_error"}``.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from hama.config import settings

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
DEFAULT_LIMIT = settings.rate_limit

LOGIN_PAGE = "/admin/login"
PUBLIC_ADMIN_API = ("/api/admin/login", "/api/admin/logout")


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def protected_area(path: str) -> Optional[str]:
    """``"page"``, ``"api"`` or ``None`` for a request path."""
    if _under(path, "/admin"):
        return None if path.startswith(LOGIN_PAGE) else "page"
    if _under(path, "/api/admin"):
        return None if path in PUBLIC_ADMIN_API else "api"
    return None


class AdminGateMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        area = protected_area(request.url.path)
        if area is None:
            return await call_next(request)

        state = request.app.state
        token = request.cookies.get(state.settings.admin_cookie_name)
        try:
            admin_id = await state.sessions.resolve(token)
        except Exception:
            logger.exception("Admin gate could not resolve session for %s", request.url.path)
            return JSONResponse(
                {"ok": False, "error": "unknown_error"}, status_code=500
            )
        if admin_id is None:
            logger.info("Admin gate rejected %s", request.url.path)
            if area == "page":
                return RedirectResponse(LOGIN_PAGE, status_code=307)
            return JSONResponse(
                {"ok": False, "error": "unauthorized"}, status_code=401
            )

        request.state.admin_id = admin_id
        return await call_next(request)
