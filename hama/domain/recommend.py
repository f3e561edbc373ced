"""
Home recommendation planning.

The "all" tab shows a mix of categories.  The base plan is 12 cards split
4/4/2/2 (restaurant/cafe/salon/activity); other counts scale the plan
proportionally, never dropping a category to zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .enums import StoreCategory

ALL_TAB = "all"
DEFAULT_ALL_COUNT = 12
DEFAULT_TAB_COUNT = 5


@dataclass(frozen=True)
class PlanItem:
    category: StoreCategory
    n: int


BASE_PLAN: tuple[PlanItem, ...] = (
    PlanItem(StoreCategory.RESTAURANT, 4),
    PlanItem(StoreCategory.CAFE, 4),
    PlanItem(StoreCategory.SALON, 2),
    PlanItem(StoreCategory.ACTIVITY, 2),
)


def normalize_tab(tab: Optional[str]) -> str:
    t = (tab or "").strip().lower() or ALL_TAB
    if t == "beauty":
        return StoreCategory.SALON.value
    return t


def parse_count(raw: Optional[str], fallback: int) -> int:
    """Positive integer from a query-string value, else *fallback*."""
    try:
        n = float(raw)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(n) or n <= 0:
        return fallback
    return max(1, math.floor(n))


def make_scaled_plan(total: int) -> list[PlanItem]:
    base_total = sum(p.n for p in BASE_PLAN)
    if total == base_total:
        return list(BASE_PLAN)

    scale = total / base_total
    # round half up, not banker's rounding
    return [
        PlanItem(p.category, max(1, math.floor(p.n * scale + 0.5)))
        for p in BASE_PLAN
    ]
