"""
Domain entities.

These are plain dataclasses decoupled from the ORM so that the search,
distance and recommendation logic can be tested without a database.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


class ReservationNotFound(Exception):
    """Raised when a reservation id does not exist."""


class StoreNotFound(Exception):
    """Raised when a store id does not exist."""


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Place:
    """A searchable place, as returned by the local filter search."""

    id: str
    name: str
    category: str
    image: str = ""
    address: Optional[str] = None


@dataclass(frozen=True)
class HomeCard:
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
    tags: list[str] = field(default_factory=list)
