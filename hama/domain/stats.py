"""
Store owner statistics.

Client events that concern a store carry the store id in ``data.id``.  The
partner dashboard shows how often each of these happened for one store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

CARD_OPEN = "home_card_open"
NAVER_OPEN = "place_open_naver"
KAKAO_OPEN = "place_open_kakao"
DETAIL_ACTION = "place_detail_action"
SEARCH_CARD_CLICK = "search_recommend_card_click"

STAT_EVENT_TYPES = (CARD_OPEN, NAVER_OPEN, KAKAO_OPEN, DETAIL_ACTION, SEARCH_CARD_CLICK)


@dataclass(frozen=True)
class StoreStats:
    card_views: int = 0
    naver_clicks: int = 0
    kakao_clicks: int = 0
    detail_actions: int = 0
    search_clicks: int = 0

    @property
    def total_clicks(self) -> int:
        # outbound links and detail buttons; card views are not clicks
        return self.naver_clicks + self.kakao_clicks + self.detail_actions


def stats_from_counts(counts: Mapping[str, int]) -> StoreStats:
    return StoreStats(
        card_views=counts.get(CARD_OPEN, 0),
        naver_clicks=counts.get(NAVER_OPEN, 0),
        kakao_clicks=counts.get(KAKAO_OPEN, 0),
        detail_actions=counts.get(DETAIL_ACTION, 0),
        search_clicks=counts.get(SEARCH_CARD_CLICK, 0),
    )
