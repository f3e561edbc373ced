"""
Distance calculation using the Haversine formula.

Missing coordinates
-------------------
Store rows may have no coordinates yet.  Any ``None`` coordinate yields
``math.inf`` so that such places sort *after* every located place and are
never reported as "right here".

Complexity: O(1) per call.
"""

from __future__ import annotations

import math
from typing import Callable, Iterable, Optional, TypeVar

EARTH_RADIUS_KM = 6_371.0

T = TypeVar("T")


def haversine_km(
    lat1: Optional[float],
    lng1: Optional[float],
    lat2: Optional[float],
    lng2: Optional[float],
) -> float:
    """Return the great-circle distance in **km** between two points."""
    if lat1 is None or lng1 is None or lat2 is None or lng2 is None:
        return math.inf

    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    # Rounding can push ``a`` a hair above 1 near antipodal points.
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, a)))


def sort_by_distance(
    items: Iterable[T],
    lat: float,
    lng: float,
    coords: Callable[[T], tuple[Optional[float], Optional[float]]],
) -> list[tuple[T, float]]:
    """Pair each item with its distance from (*lat*, *lng*), nearest first.

    The sort is stable; items without coordinates keep their relative order
    at the end.
    """
    paired = [(item, haversine_km(lat, lng, *coords(item))) for item in items]
    paired.sort(key=lambda pair: pair[1])
    return paired
