"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, Field


# ── Requests ──────────────────────────────────────────────────────────


class ReservationCreateRequest(BaseModel):
    """All fields optional so that missing ones produce ``<field> required``."""

    store: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    name: Optional[str] = None
    people: Optional[int] = Field(None, ge=0, le=100)
    date: Optional[str] = None
    time: Optional[str] = None
    note: Optional[str] = None
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)

    REQUIRED: ClassVar[tuple[str, ...]] = ("store", "address", "name", "people", "date", "time")

    def first_missing(self) -> Optional[str]:
        for field in self.REQUIRED:
            if not getattr(self, field):
                return field
        return None


class AdminLoginRequest(BaseModel):
    email: str
    password: str


class CoverImageRequest(BaseModel):
    cover_image_url: Optional[str] = None


class StoreOwnerRequest(BaseModel):
    owner_id: Optional[str] = None


class LogEventRequest(BaseModel):
    type: str = Field(..., min_length=1, max_length=80)
    data: Optional[Any] = None
    ts: Optional[int] = None


# ── Responses ─────────────────────────────────────────────────────────


class OkResponse(BaseModel):
    ok: bool = True


class ReservationResponse(BaseModel):
    id: str
    store: str
    address: str
    phone: str = ""
    name: str
    people: int
    date: str
    time: str
    note: str = ""
    lat: Optional[float] = None
    lng: Optional[float] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AdminReservationsResponse(BaseModel):
    ok: bool = True
    data: list[ReservationResponse] = []


class ReservationListResponse(BaseModel):
    ok: bool = True
    items: list[ReservationResponse] = []


class ReservationCreatedResponse(BaseModel):
    ok: bool = True
    item: ReservationResponse


class PlaceResponse(BaseModel):
    id: str
    name: str
    category: str
    image: str = ""
    address: Optional[str] = None

    model_config = {"from_attributes": True}


class PlaceSearchResponse(BaseModel):
    ok: bool = True
    results: list[PlaceResponse] = []


class HomeCardResponse(BaseModel):
    id: str
    name: str
    category: str
    category_label: str
    distance_km: float
    mood_text: str
    image_url: str
    quick_query: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    mood: Optional[str] = None
    with_kids: Optional[bool] = None
    for_work: Optional[bool] = None
    price_level: Optional[int] = None
    tags: list[str] = []

    model_config = {"from_attributes": True}


class HomeCardListResponse(BaseModel):
    items: list[HomeCardResponse] = []


class StoreSummary(BaseModel):
    id: str
    name: str
    category: str
    area: Optional[str] = None

    model_config = {"from_attributes": True}


class AdminStoreSummary(StoreSummary):
    owner_id: Optional[str] = None


class StoreListResponse(BaseModel):
    stores: list[StoreSummary] = []


class AdminStoreListResponse(BaseModel):
    stores: list[AdminStoreSummary] = []


class StoreOwnerResponse(BaseModel):
    ok: bool = True
    store: AdminStoreSummary


class UserSummary(BaseModel):
    id: str
    nickname: Optional[str] = None

    model_config = {"from_attributes": True}


class UserListResponse(BaseModel):
    users: list[UserSummary] = []


class PartnerStatsResponse(BaseModel):
    store_id: str
    store_name: Optional[str] = None
    store_category: Optional[str] = None
    card_views: int = 0
    naver_clicks: int = 0
    kakao_clicks: int = 0
    detail_actions: int = 0
    search_clicks: int = 0
    total_clicks: int = 0


class StoreCoverResponse(BaseModel):
    id: str
    name: str
    cover_image_url: Optional[str] = None

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"
