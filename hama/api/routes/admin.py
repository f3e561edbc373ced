"""
Admin dashboard endpoints
=========================

POST /api/admin/login         -- email/password login, sets the session cookie
POST /api/admin/logout        -- revokes the session and clears the cookie
GET  /api/admin/reservations  -- all reservations, newest first
GET  /api/admin/stores?q=     -- store search across all owners
PATCH /api/admin/stores/{id}  -- assign or clear a store's owner
GET  /api/admin/users?q=      -- users by nickname (owner picker)

Everything except login/logout sits behind ``AdminGateMiddleware``.
"""

from __future__ import annotations

import logging

import bcrypt
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hama.api.dependencies import get_db, get_session_store, get_settings
from hama.api.middleware import DEFAULT_LIMIT, limiter
from hama.api.routes.reservations import error_response
from hama.api.schemas import (
    AdminLoginRequest,
    AdminReservationsResponse,
    AdminStoreListResponse,
    AdminStoreSummary,
    OkResponse,
    ReservationResponse,
    StoreOwnerRequest,
    StoreOwnerResponse,
    UserListResponse,
    UserSummary,
)
from hama.config import Settings
from hama.domain.entities import StoreNotFound
from hama.infrastructure.repositories import (
    AdminUserRepository,
    ReservationRepository,
    StoreRepository,
    UserRepository,
)
from hama.infrastructure.sessions import AdminSessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

STORE_LIMIT_DEFAULT = 30
STORE_LIMIT_MAX = 100
USER_LIMIT_DEFAULT = 50
USER_LIMIT_MAX = 100


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # malformed hash in the database
        return False


@router.post("/login", response_model=OkResponse, summary="Admin login")
@limiter.limit(DEFAULT_LIMIT)
async def login(
    request: Request,
    body: AdminLoginRequest,
    db: AsyncSession = Depends(get_db),
    sessions: AdminSessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    try:
        user = await AdminUserRepository(db).get_by_email(body.email)
        if user is None:
            return JSONResponse(
                {"ok": False, "error": "존재하지 않는 관리자입니다."}, status_code=401
            )
        if not verify_password(body.password, user.password_hash):
            return JSONResponse(
                {"ok": False, "error": "비밀번호가 올바르지 않습니다."}, status_code=401
            )
        token = await sessions.create(user.id)
    except Exception:
        logger.exception("[POST /api/admin/login] error")
        return JSONResponse(
            {"ok": False, "error": "서버 내부 오류입니다."}, status_code=500
        )

    logger.info("Admin %s logged in", user.email)
    response = JSONResponse({"ok": True})
    response.set_cookie(
        settings.admin_cookie_name,
        token,
        max_age=settings.admin_session_max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return response


@router.post("/logout", response_model=OkResponse, summary="Admin logout")
async def logout(
    request: Request,
    sessions: AdminSessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    token = request.cookies.get(settings.admin_cookie_name)
    try:
        await sessions.revoke(token)
    except Exception:
        # the cookie is cleared regardless; the token expires on its own
        logger.exception("[POST /api/admin/logout] could not revoke session")

    response = JSONResponse({"ok": True})
    response.set_cookie(settings.admin_cookie_name, "", max_age=0, path="/")
    return response


@router.get(
    "/reservations",
    response_model=AdminReservationsResponse,
    summary="List all reservations, newest first",
)
@limiter.limit(DEFAULT_LIMIT)
async def list_reservations(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        rows = await ReservationRepository(db).list_recent()
    except Exception as exc:
        logger.exception("[ADMIN_RESERVATIONS][ERROR]")
        return error_response(exc)
    return AdminReservationsResponse(
        data=[ReservationResponse.model_validate(r) for r in rows]
    )


@router.get(
    "/stores",
    response_model=AdminStoreListResponse,
    summary="Search stores across all owners",
)
@limiter.limit(DEFAULT_LIMIT)
async def list_stores(
    request: Request,
    q: str = "",
    limit: int = STORE_LIMIT_DEFAULT,
    db: AsyncSession = Depends(get_db),
):
    limit = min(limit if limit > 0 else STORE_LIMIT_DEFAULT, STORE_LIMIT_MAX)
    try:
        rows = await StoreRepository(db).search_by_name(q.strip(), limit)
    except Exception:
        logger.exception("[admin/stores]")
        return JSONResponse({"stores": []}, status_code=500)
    return AdminStoreListResponse(
        stores=[AdminStoreSummary.model_validate(s) for s in rows]
    )


@router.patch(
    "/stores/{store_id}",
    response_model=StoreOwnerResponse,
    summary="Assign or clear a store's owner",
    responses={
        400: {"description": "owner_id missing from the body."},
        404: {"description": "No such store."},
    },
)
@limiter.limit(DEFAULT_LIMIT)
async def set_store_owner(
    request: Request,
    store_id: str,
    body: StoreOwnerRequest,
    db: AsyncSession = Depends(get_db),
):
    if "owner_id" not in body.model_fields_set:
        return JSONResponse({"error": "owner_id required"}, status_code=400)

    owner_id = (body.owner_id or "").strip() or None
    try:
        store = await StoreRepository(db).set_owner(store_id, owner_id)
    except StoreNotFound:
        return JSONResponse({"error": "store not found"}, status_code=404)
    except Exception as exc:
        logger.exception("[admin/stores PATCH]")
        await db.rollback()
        return JSONResponse({"error": str(exc) or "Failed to update"}, status_code=500)

    logger.info("Store %s owner set to %s", store_id, owner_id)
    return StoreOwnerResponse(store=AdminStoreSummary.model_validate(store))


@router.get("/users", response_model=UserListResponse, summary="Search users")
@limiter.limit(DEFAULT_LIMIT)
async def list_users(
    request: Request,
    q: str = "",
    limit: int = USER_LIMIT_DEFAULT,
    db: AsyncSession = Depends(get_db),
):
    limit = min(limit if limit > 0 else USER_LIMIT_DEFAULT, USER_LIMIT_MAX)
    try:
        rows = await UserRepository(db).search(q.strip(), limit)
    except Exception:
        logger.exception("[admin/users]")
        return JSONResponse({"users": []}, status_code=500)
    return UserListResponse(users=[UserSummary.model_validate(u) for u in rows])
