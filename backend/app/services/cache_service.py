"""
Redis read cache for resource bookings on a given day.

CACHING STRATEGY
================

What we cache:
  - The booking list for one resource on one day, JSON-serialized
  - Key pattern: "bookings:resource:{resource_id}:{YYYY-MM-DD}"

Why:
  - Availability grids poll this lookup far more often than bookings change

Invalidation strategy:
  - On booking create/update/delete: drop every key of the affected resource
  - On institution-wide clears: drop every resource key (we do not know which
    resources the institution owns without another query)
  - TTL-based expiry as safety net

  Prefix invalidation uses SCAN. The keyspace is one key per resource/day
  that was actually read, so the scan stays small.

The cache is advisory. Any Redis error is logged and the caller falls back
to the database; when Redis is disabled every method is a no-op.
"""

import json
from datetime import date
from typing import Any, Optional

import redis.asyncio as redis

from app.core.logging import get_logger
from app.core.metrics import record_cache_operation

logger = get_logger(__name__)

KEY_PREFIX = "bookings:resource:"


def _make_key(resource_id: str, day: date) -> str:
    return f"{KEY_PREFIX}{resource_id}:{day.isoformat()}"


class BookingCache:
    def __init__(self, client: Optional[redis.Redis], ttl: int = 300):
        self.client = client
        self.ttl = ttl

    @property
    def enabled(self) -> bool:
        return self.client is not None

    async def get_resource_bookings(self, resource_id: str, day: date) -> Optional[list[dict[str, Any]]]:
        if not self.client:
            return None

        key = _make_key(resource_id, day)
        try:
            data = await self.client.get(key)
        except redis.RedisError as e:
            logger.error("cache_get_error", key=key, error=str(e))
            return None

        record_cache_operation("get", hit=data is not None)
        if data is None:
            logger.debug("cache_miss", key=key)
            return None
        logger.debug("cache_hit", key=key)
        return json.loads(data)

    async def set_resource_bookings(
        self, resource_id: str, day: date, bookings: list[dict[str, Any]]
    ) -> None:
        if not self.client:
            return

        key = _make_key(resource_id, day)
        try:
            await self.client.setex(key, self.ttl, json.dumps(bookings, default=str))
            logger.debug("cache_set", key=key, ttl=self.ttl)
        except redis.RedisError as e:
            logger.error("cache_set_error", key=key, error=str(e))

    async def invalidate_resource(self, resource_id: str) -> None:
        await self._invalidate(f"{KEY_PREFIX}{resource_id}:*")

    async def invalidate_all(self) -> None:
        await self._invalidate(f"{KEY_PREFIX}*")

    async def _invalidate(self, pattern: str) -> None:
        if not self.client:
            return

        try:
            deleted = 0
            async for key in self.client.scan_iter(match=pattern, count=100):
                await self.client.delete(key)
                deleted += 1
            logger.info("cache_invalidated", pattern=pattern, keys_deleted=deleted)
        except redis.RedisError as e:
            logger.error("cache_invalidation_error", pattern=pattern, error=str(e))

    async def stats(self) -> dict[str, Any]:
        """Redis cache statistics for the health endpoint."""
        if not self.client:
            return {"status": "disabled"}

        try:
            info = await self.client.info("stats")
        except redis.RedisError as e:
            return {"status": "error", "error": str(e)}

        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
        }

    async def close(self) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None
