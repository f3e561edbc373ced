"""
Category normalisation and store -> home card mapping.

Store rows come from several sources (Kakao imports, partner edits, the
seed script) and their ``category`` is not always canonical: it can be a
Kakao group code (``FD6``), a Korean word (``카페``) or a legacy value
(``beauty``).  Everything is folded into :class:`StoreCategory`.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from .entities import HomeCard
from .enums import CATEGORY_HINTS, CATEGORY_LABELS, KAKAO_CATEGORY_CODES, StoreCategory

DEFAULT_CARD_IMAGE = "/images/sample-cafe-1.jpg"
DEFAULT_MOOD_TEXT = "가까운 추천 매장"


def normalize_category(raw: Any) -> StoreCategory:
    c = str(raw if raw is not None else "").strip().lower()

    if c == "beauty":
        return StoreCategory.SALON
    if c in KAKAO_CATEGORY_CODES:
        return KAKAO_CATEGORY_CODES[c]
    for category, hints in CATEGORY_HINTS:
        if any(h in c for h in hints):
            return category
    try:
        return StoreCategory(c)
    except ValueError:
        return StoreCategory.RESTAURANT


def category_label(raw: Any) -> str:
    return CATEGORY_LABELS[normalize_category(raw)]


def store_to_home_card(store: Any, distance_km: Optional[float] = None) -> HomeCard:
    """Map a store row (ORM object or anything with the same attributes)."""
    category = normalize_category(getattr(store, "category", None))
    if distance_km is None or not math.isfinite(distance_km):
        distance_km = 0.0

    name = getattr(store, "name", "") or ""
    mood = getattr(store, "mood", None)
    return HomeCard(
        id=str(store.id),
        name=name,
        category=category.value,
        category_label=CATEGORY_LABELS[category],
        distance_km=round(distance_km, 1),
        mood_text=mood or getattr(store, "distance_hint", None) or DEFAULT_MOOD_TEXT,
        image_url=getattr(store, "image_url", None) or DEFAULT_CARD_IMAGE,
        quick_query=name,
        lat=getattr(store, "lat", None),
        lng=getattr(store, "lng", None),
        mood=mood,
        with_kids=getattr(store, "with_kids", None),
        for_work=getattr(store, "for_work", None),
        price_level=getattr(store, "price_level", None),
        tags=list(getattr(store, "tags", None) or []),
    )
