"""
Redis-backed admin sessions.

The ``hama_admin`` cookie only carries an opaque random token.  The token
maps to the admin user id under ``session:admin:<token>`` with the same TTL
as the cookie, so a forged or revoked cookie does not resolve.
"""

from __future__ import annotations

import secrets
from typing import Optional

import redis.asyncio as aioredis

TOKEN_BYTES = 32


class AdminSessionStore:
    def __init__(self, client: aioredis.Redis, ttl_seconds: int):
        self.redis = client
        self.ttl = ttl_seconds

    @staticmethod
    def _key(token: str) -> str:
        return f"session:admin:{token}"

    async def create(self, admin_id: str) -> str:
        """Mint a token for *admin_id* and return it."""
        token = secrets.token_urlsafe(TOKEN_BYTES)
        await self.redis.set(self._key(token), admin_id, ex=self.ttl)
        return token

    async def resolve(self, token: Optional[str]) -> Optional[str]:
        """Admin id for *token*, or ``None`` if unknown / expired."""
        if not token:
            return None
        return await self.redis.get(self._key(token))

    async def revoke(self, token: Optional[str]) -> None:
        if token:
            await self.redis.delete(self._key(token))
