"""
Kakao Local API client.

Thin async wrapper that attaches the server-side REST key
(``Authorization: KakaoAK <key>``) and returns Kakao's JSON unchanged.
Errors (network, non-2xx, malformed JSON) propagate to the caller; the
routes turn them into a generic 500.  No retries, no caching.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

KEYWORD_SEARCH_PATH = "/v2/local/search/keyword.json"
COORD_TO_REGION_PATH = "/v2/local/geo/coord2regioncode.json"

MAX_RADIUS_M = 20_000


class KakaoNotConfigured(RuntimeError):
    """Raised when a call is attempted without a REST API key."""


class KakaoLocalClient:
    def __init__(
        self,
        rest_api_key: Optional[str],
        base_url: str = "https://dapi.kakao.com",
        timeout: float = 10.0,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.rest_api_key = rest_api_key
        self._http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    @property
    def configured(self) -> bool:
        return bool(self.rest_api_key)

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        if not self.configured:
            raise KakaoNotConfigured("KAKAO_REST_API_KEY missing")
        resp = await self._http.get(
            path,
            params=params,
            headers={"Authorization": f"KakaoAK {self.rest_api_key}"},
        )
        resp.raise_for_status()
        return resp.json()

    async def keyword_search(
        self,
        query: str,
        *,
        x: Optional[str] = None,
        y: Optional[str] = None,
        radius: Optional[int] = None,
    ) -> Any:
        params: dict[str, Any] = {"query": query}
        if x and y:
            params.update(x=x, y=y, sort="distance")
            if radius is not None:
                params["radius"] = max(0, min(radius, MAX_RADIUS_M))
        return await self._get(KEYWORD_SEARCH_PATH, params)

    async def coord_to_region(self, x: str, y: str) -> Any:
        return await self._get(COORD_TO_REGION_PATH, {"x": x, "y": y})

    async def aclose(self) -> None:
        await self._http.aclose()
