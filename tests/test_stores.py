"""Home cards, nearby stores, home recommendations and partner endpoints."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

OSAN_STATION = {"lat": 37.1452, "lng": 127.0668}


# ── Home / nearby ─────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_home_sorted_by_distance(client: AsyncClient):
    resp = await client.get("/api/stores/home", params=OSAN_STATION)
    assert resp.status_code == 200
    items = resp.json()["items"]

    assert [i["id"] for i in items] == [
        "s-cafe-1", "s-food-1", "s-act-1", "s-cafe-2", "s-salon-1",
    ]
    distances = [i["distance_km"] for i in items]
    assert distances[:-1] == sorted(distances[:-1])
    # no coordinates: last, reported as 0
    assert items[-1]["lat"] is None
    assert items[-1]["distance_km"] == 0.0


@pytest.mark.asyncio
async def test_home_without_origin(client: AsyncClient):
    resp = await client.get("/api/stores/home")
    items = resp.json()["items"]
    assert len(items) == 5
    assert all(i["distance_km"] == 0.0 for i in items)
    cafe = next(i for i in items if i["id"] == "s-cafe-1")
    assert cafe["category_label"] == "카페"
    assert cafe["quick_query"] == "하마 카페"


@pytest.mark.asyncio
async def test_nearby_stores_radius(client: AsyncClient):
    resp = await client.get("/api/stores/nearby", params={**OSAN_STATION, "radius": 500})
    assert resp.status_code == 200
    assert [i["id"] for i in resp.json()["items"]] == ["s-cafe-1", "s-food-1"]


@pytest.mark.asyncio
async def test_nearby_stores_requires_origin(client: AsyncClient):
    resp = await client.get("/api/stores/nearby", params={"lat": 37.1})
    assert resp.status_code == 422


# ── Home recommend ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_recommend_category_tab(client: AsyncClient):
    resp = await client.get("/api/home-recommend", params={"tab": "cafe"})
    assert resp.status_code == 200
    items = resp.json()["items"]
    assert {i["category"] for i in items} == {"cafe"}
    # newest first
    assert [i["id"] for i in items] == ["s-closed", "s-cafe-2", "s-cafe-1"]


@pytest.mark.asyncio
async def test_recommend_beauty_alias_and_count(client: AsyncClient):
    resp = await client.get("/api/home-recommend", params={"tab": "beauty", "count": "1"})
    assert [i["id"] for i in resp.json()["items"]] == ["s-salon-1"]


@pytest.mark.asyncio
async def test_recommend_all_mixes_categories(client: AsyncClient):
    resp = await client.get("/api/home-recommend")
    assert resp.status_code == 200
    items = resp.json()["items"]
    assert [i["category"] for i in items] == [
        "restaurant", "cafe", "cafe", "cafe", "salon", "activity",
    ]


@pytest.mark.asyncio
async def test_recommend_all_truncates_to_count(client: AsyncClient):
    resp = await client.get("/api/home-recommend", params={"tab": "all", "count": "2"})
    items = resp.json()["items"]
    assert len(items) == 2
    assert [i["category"] for i in items] == ["restaurant", "cafe"]


@pytest.mark.asyncio
async def test_recommend_sorted_when_origin_given(client: AsyncClient):
    resp = await client.get(
        "/api/home-recommend", params={"tab": "cafe", **OSAN_STATION}
    )
    items = resp.json()["items"]
    assert [i["id"] for i in items] == ["s-closed", "s-cafe-1", "s-cafe-2"]
    assert items[0]["distance_km"] == 0.0


# ── Partner ───────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_partner_stores_requires_login(client: AsyncClient):
    resp = await client.get("/api/partner/stores")
    assert resp.status_code == 401
    assert resp.json() == {"error": "로그인이 필요해요"}


@pytest.mark.asyncio
async def test_partner_stores_only_own(client: AsyncClient):
    client.cookies.set("hama_user_id", "owner-1")
    resp = await client.get("/api/partner/stores")
    assert resp.status_code == 200
    assert {s["id"] for s in resp.json()["stores"]} == {"s-cafe-1", "s-food-1"}

    resp = await client.get("/api/partner/stores", params={"q": "식당"})
    assert [s["id"] for s in resp.json()["stores"]] == ["s-food-1"]


@pytest.mark.asyncio
async def test_partner_update_cover_image(client: AsyncClient):
    client.cookies.set("hama_user_id", "owner-1")
    resp = await client.patch(
        "/api/partner/stores/s-cafe-1",
        json={"cover_image_url": " https://cdn.example.com/cover.jpg "},
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "id": "s-cafe-1",
        "name": "하마 카페",
        "cover_image_url": "https://cdn.example.com/cover.jpg",
    }

    resp = await client.patch(
        "/api/partner/stores/s-cafe-1", json={"cover_image_url": "  "}
    )
    assert resp.json()["cover_image_url"] is None


@pytest.mark.asyncio
async def test_partner_update_requires_login(client: AsyncClient):
    resp = await client.patch(
        "/api/partner/stores/s-cafe-1", json={"cover_image_url": "x"}
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("store_id", ["s-cafe-2", "no-such-store"])
async def test_partner_update_forbidden(client: AsyncClient, store_id):
    client.cookies.set("hama_user_id", "owner-1")
    resp = await client.patch(
        f"/api/partner/stores/{store_id}", json={"cover_image_url": "x"}
    )
    assert resp.status_code == 403
    assert resp.json() == {"error": "이 매장을 수정할 권한이 없어요"}


@pytest.mark.asyncio
async def test_partner_update_requires_field(client: AsyncClient):
    client.cookies.set("hama_user_id", "owner-1")
    resp = await client.patch("/api/partner/stores/s-cafe-1", json={})
    assert resp.status_code == 400
    assert resp.json() == {"error": "cover_image_url 필요해요"}


# ── Partner stats ─────────────────────────────────────────────────────


async def _log(client: AsyncClient, event_type: str, store_id: str):
    resp = await client.post("/api/log", json={"type": event_type, "data": {"id": store_id}})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_partner_stats_counts_events_for_store(client: AsyncClient):
    for event_type, store_id in [
        ("home_card_open", "s-cafe-1"),
        ("home_card_open", "s-cafe-1"),
        ("place_open_naver", "s-cafe-1"),
        ("place_detail_action", "s-cafe-1"),
        ("search_recommend_card_click", "s-cafe-1"),
        ("search", "s-cafe-1"),              # not a stats event
        ("place_open_kakao", "s-food-1"),    # other store
    ]:
        await _log(client, event_type, store_id)

    client.cookies.set("hama_user_id", "owner-1")
    resp = await client.get("/api/partner/stats", params={"store_id": "s-cafe-1"})
    assert resp.status_code == 200
    assert resp.json() == {
        "store_id": "s-cafe-1",
        "store_name": "하마 카페",
        "store_category": "cafe",
        "card_views": 2,
        "naver_clicks": 1,
        "kakao_clicks": 0,
        "detail_actions": 1,
        "search_clicks": 1,
        "total_clicks": 2,
    }


@pytest.mark.asyncio
async def test_partner_stats_without_events(client: AsyncClient):
    client.cookies.set("hama_user_id", "owner-1")
    resp = await client.get("/api/partner/stats", params={"store_id": "s-food-1"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["card_views"] == 0
    assert body["total_clicks"] == 0


@pytest.mark.asyncio
async def test_partner_stats_requires_login(client: AsyncClient):
    resp = await client.get("/api/partner/stats", params={"store_id": "s-cafe-1"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "로그인이 필요해요"}


@pytest.mark.asyncio
async def test_partner_stats_requires_store_id(client: AsyncClient):
    client.cookies.set("hama_user_id", "owner-1")
    resp = await client.get("/api/partner/stats")
    assert resp.status_code == 400
    assert resp.json() == {"error": "store_id required"}


@pytest.mark.asyncio
@pytest.mark.parametrize("store_id", ["s-cafe-2", "s-salon-1", "no-such-store"])
async def test_partner_stats_forbidden(client: AsyncClient, store_id):
    client.cookies.set("hama_user_id", "owner-1")
    resp = await client.get("/api/partner/stats", params={"store_id": store_id})
    assert resp.status_code == 403
    assert resp.json() == {"error": "이 매장의 통계를 볼 권한이 없어요"}
