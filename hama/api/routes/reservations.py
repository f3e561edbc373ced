"""
Reservation endpoints
=====================

GET    /api/reservations       -- list reservations, newest first
POST   /api/reservations       -- create a reservation (409 on a taken slot)
DELETE /api/reservations/{id}  -- delete by id

Every database failure, including deleting an unknown id, is reported as
``500 {"ok": false, "error": "<message>"}``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hama.api.dependencies import get_db
from hama.api.middleware import DEFAULT_LIMIT, limiter
from hama.api.schemas import (
    OkResponse,
    ReservationCreateRequest,
    ReservationCreatedResponse,
    ReservationListResponse,
    ReservationResponse,
)
from hama.infrastructure.repositories import ReservationRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reservations", tags=["reservations"])


def error_response(exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(
        {"ok": False, "error": str(exc) or "unknown_error"}, status_code=status_code
    )


@router.get("", response_model=ReservationListResponse, summary="List reservations")
@limiter.limit(DEFAULT_LIMIT)
async def list_reservations(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        rows = await ReservationRepository(db).list_recent()
    except Exception as exc:
        logger.exception("[GET /api/reservations] error")
        return error_response(exc)
    return ReservationListResponse(
        items=[ReservationResponse.model_validate(r) for r in rows]
    )


@router.post(
    "",
    response_model=ReservationCreatedResponse,
    summary="Create a reservation",
    responses={
        400: {"description": "A required field is missing."},
        409: {"description": "The store already has a booking at that date/time."},
    },
)
@limiter.limit(DEFAULT_LIMIT)
async def create_reservation(
    request: Request,
    body: ReservationCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    missing = body.first_missing()
    if missing:
        return JSONResponse(
            {"ok": False, "error": f"{missing} required"}, status_code=400
        )

    repo = ReservationRepository(db)
    try:
        # ── Soft duplicate guard (same store / date / time) ───────────
        if await repo.find_slot(store=body.store, date=body.date, time=body.time):
            return JSONResponse(
                {"ok": False, "error": "이미 해당 시간에 예약이 있습니다."},
                status_code=409,
            )

        saved = await repo.create(
            store=body.store,
            address=body.address,
            phone=body.phone or "",
            name=body.name,
            people=body.people or 1,
            date=body.date,
            time=body.time,
            note=body.note or "",
            lat=body.lat,
            lng=body.lng,
        )
        await db.refresh(saved)
    except Exception as exc:
        logger.exception("[POST /api/reservations] error")
        await db.rollback()
        return error_response(exc)

    logger.info("Reservation %s created for %s", saved.id, saved.store)
    return ReservationCreatedResponse(item=ReservationResponse.model_validate(saved))


@router.delete(
    "/{reservation_id}",
    response_model=OkResponse,
    summary="Delete a reservation",
    description=(
        "Not-found and database errors are not distinguished: both return "
        "500 with the error message."
    ),
)
@limiter.limit(DEFAULT_LIMIT)
async def delete_reservation(
    request: Request,
    reservation_id: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        await ReservationRepository(db).delete(reservation_id)
    except Exception as exc:
        logger.exception("[DELETE /api/reservations/%s] error", reservation_id)
        return error_response(exc)
    return OkResponse()
