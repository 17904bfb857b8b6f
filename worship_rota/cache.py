"""
Redis caching utilities for expanded service occurrences
The scheduling core stays pure; memoization lives here, owned by the service layer
"""
import hashlib
import json
import logging
from datetime import date
from typing import Any, Iterable, Optional

import redis
from pydantic import BaseModel

from .config import (
    CACHE_ENABLED,
    REDIS_DB,
    REDIS_HOST,
    REDIS_PASSWORD,
    REDIS_PORT,
    REDIS_SSL,
    REDIS_URL,
)

logger = logging.getLogger(__name__)

# Redis connection
redis_client: Optional[redis.Redis] = None


def get_redis_client() -> redis.Redis:
    """
    Get or create Redis client
    Supports both a REDIS_URL and individual host/port settings
    """
    global redis_client

    if redis_client is None:
        logger.info("🔄 Initializing Redis connection for caching...")

        try:
            if REDIS_URL:
                client = redis.from_url(
                    REDIS_URL,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5,
                    retry_on_timeout=True,
                    health_check_interval=30,
                )
            elif REDIS_HOST:
                client = redis.Redis(
                    host=REDIS_HOST,
                    port=REDIS_PORT,
                    password=REDIS_PASSWORD,
                    db=REDIS_DB,
                    ssl=REDIS_SSL,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5,
                    retry_on_timeout=True,
                    health_check_interval=30,
                )
            else:
                raise RuntimeError("Redis is not configured (set REDIS_URL or REDIS_HOST)")
            # Test connection
            client.ping()
            redis_client = client
            logger.info("Redis connected successfully")
        except Exception as e:
            logger.error(f"❌ Failed to connect to Redis: {str(e)}")
            raise

    return redis_client


class Cache:
    """Redis cache wrapper with automatic serialization"""

    def __init__(self, client: Optional[Any] = None, enabled: bool = CACHE_ENABLED):
        self.redis_client = client
        self.enabled = enabled

    def _get_client(self):
        """Lazy load Redis client"""
        if not self.enabled:
            return None
        if self.redis_client is None:
            try:
                self.redis_client = get_redis_client()
            except Exception as e:
                logger.warning(f"⚠️ Redis cache unavailable: {e}")
                return None
        return self.redis_client

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        client = self._get_client()
        if not client:
            return None

        try:
            value = client.get(key)
            if value:
                logger.debug(f"✅ Cache HIT: {key}")
                return json.loads(value)
            logger.debug(f"❌ Cache MISS: {key}")
            return None
        except Exception as e:
            logger.error(f"❌ Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        """Set value in cache with TTL (default 1 hour)"""
        client = self._get_client()
        if not client:
            return False

        try:
            serialized = json.dumps(value)
            client.setex(key, ttl, serialized)
            logger.debug(f"✅ Cache SET: {key} (TTL: {ttl}s)")
            return True
        except Exception as e:
            logger.error(f"❌ Cache set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete value from cache"""
        client = self._get_client()
        if not client:
            return False

        try:
            client.delete(key)
            logger.debug(f"✅ Cache DELETE: {key}")
            return True
        except Exception as e:
            logger.error(f"❌ Cache delete error for {key}: {e}")
            return False

    def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern (e.g., 'occurrences:*')"""
        client = self._get_client()
        if not client:
            return 0

        try:
            keys = client.keys(pattern)
            if keys:
                deleted = client.delete(*keys)
                logger.debug(f"✅ Cache DELETE pattern: {pattern} ({deleted} keys)")
                return deleted
            return 0
        except Exception as e:
            logger.error(f"❌ Cache delete pattern error for {pattern}: {e}")
            return 0


# Global cache instance
cache = Cache()


# Cache key builders


def definitions_fingerprint(definitions: Iterable[BaseModel]) -> str:
    """Order-independent hash of the definitions an expansion was computed from"""
    dumped = sorted(
        json.dumps(d.model_dump(mode="json"), sort_keys=True) for d in definitions
    )
    return hashlib.sha256("\n".join(dumped).encode("utf-8")).hexdigest()


def build_occurrences_key(
    fingerprint: str,
    range_start: date,
    range_end: date,
    campus_id: Optional[str] = None,
    category: Optional[str] = None,
) -> str:
    """Build cache key for an occurrence expansion"""
    return (
        f"occurrences:{fingerprint}:{range_start.isoformat()}:{range_end.isoformat()}"
        f":{campus_id or 'all'}:{category or 'all'}"
    )
