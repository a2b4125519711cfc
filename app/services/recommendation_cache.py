"""
Redis-backed store for ranked recommendation lists.

Each user has at most one entry holding the complete ranked list; pages are
served by slicing it. Entries are written whole and removed whole, never
patched, and expire by TTL inside Redis.
"""

import json
import logging
from typing import List, Optional
from uuid import UUID

from pydantic import TypeAdapter
from redis.exceptions import RedisError

from app.core import cache
from app.core.config import settings
from app.schemas.recommendation import ScoredCompanion

logger = logging.getLogger(__name__)

CACHE_PREFIX = "rec:"

_ranked_list_adapter = TypeAdapter(List[ScoredCompanion])


class RecommendationCache:

    def __init__(self, ttl_seconds: Optional[int] = None, prefix: str = CACHE_PREFIX):
        self.ttl_seconds = settings.recommendation_cache_ttl if ttl_seconds is None else ttl_seconds
        self.prefix = prefix

    def key_for(self, user_id: UUID) -> str:
        return f"{self.prefix}{user_id}"

    async def get(self, user_id: UUID) -> Optional[List[ScoredCompanion]]:
        """Return the cached ranked list, or None on miss."""
        try:
            r = await cache.get_redis()
            raw = await r.get(self.key_for(user_id))
        except RedisError:
            logger.error("Recommendation cache read failed for %s", user_id, exc_info=True)
            raise
        if not raw:
            return None
        return _ranked_list_adapter.validate_json(raw)

    async def set(self, user_id: UUID, companions: List[ScoredCompanion]) -> None:
        """Store the complete ranked list for ``ttl_seconds``. A TTL of 0 disables caching."""
        if self.ttl_seconds <= 0:
            return
        payload = json.dumps(
            [c.model_dump(mode="json", by_alias=True) for c in companions]
        )
        try:
            r = await cache.get_redis()
            await r.setex(self.key_for(user_id), self.ttl_seconds, payload)
        except RedisError:
            logger.error("Recommendation cache write failed for %s", user_id, exc_info=True)
            raise

    async def invalidate(self, user_id: UUID) -> None:
        """Delete the user's entry, if any."""
        try:
            r = await cache.get_redis()
            await r.delete(self.key_for(user_id))
        except RedisError:
            logger.error("Recommendation cache invalidation failed for %s", user_id, exc_info=True)
            raise
