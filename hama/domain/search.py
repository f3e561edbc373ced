"""Case-insensitive substring filter used by ``GET /api/search``."""

from __future__ import annotations

from typing import Iterable

from .entities import Place

DEFAULT_LIMIT = 20


def _haystack(place: Place) -> str:
    return f"{place.name} {place.category} {place.address or ''}".lower()


def filter_places(
    places: Iterable[Place], query: str, limit: int = DEFAULT_LIMIT
) -> list[Place]:
    """Return at most *limit* places whose name/category/address contain *query*.

    An empty (or whitespace-only) query matches nothing rather than
    everything.
    """
    q = (query or "").strip().lower()
    if not q or limit <= 0:
        return []

    results: list[Place] = []
    for place in places:
        if q in _haystack(place):
            results.append(place)
            if len(results) >= limit:
                break
    return results
