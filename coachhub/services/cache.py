"""
CoachHub API - Redis Read Cache.

Redis-backed cache for data-access reads. Every cached read registers under
one or more invalidation tags:

- ``tagver:<tag>`` holds a generation counter that is folded into the cache
  key, so a read that was computed before an invalidation can never be served
  after it.
- ``tag:<tag>`` is a set indexing the keys cached under that tag, so
  invalidation deletes exactly those keys and nothing else.

Lazy-initializes to allow app startup without Redis; when Redis is down the
reads simply go to MongoDB.
"""

import functools
import json
import hashlib
import logging
import socket
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, TypeVar
from datetime import datetime, timedelta

from settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _tag_name(tag: Any) -> str:
    """Plain string name of a tag (accepts ``CacheTag`` members)."""
    return getattr(tag, "value", tag)


class CacheService:
    """
    Redis cache service with tag-based invalidation.

    Includes circuit breaker pattern for resilience: after repeated Redis
    failures the cache is bypassed for a cool-down period.
    """

    def __init__(self, redis_url: str, client: Any = None):
        """Initialize Redis cache client (lazy connection unless ``client`` is given)."""
        self._redis_url = redis_url
        self._client = client
        self._circuit_open_until: Optional[datetime] = None
        self._failure_count = 0
        self._circuit_threshold = 5
        self._circuit_timeout = 60

    def configure(self, client: Any) -> None:
        """Use an already constructed async Redis client."""
        self._client = client
        self._circuit_open_until = None
        self._failure_count = 0

    def _is_circuit_open(self) -> bool:
        """Check if circuit breaker is open."""
        if self._circuit_open_until:
            if datetime.now() < self._circuit_open_until:
                return True
            # Circuit timeout expired, allow retry
            self._circuit_open_until = None
            self._failure_count = 0
        return False

    def _record_failure(self):
        """Record failure and potentially open circuit."""
        self._failure_count += 1
        if self._failure_count >= self._circuit_threshold:
            self._circuit_open_until = datetime.now() + timedelta(seconds=self._circuit_timeout)
            logger.warning(
                f"Circuit breaker OPEN for {self._circuit_timeout}s after {self._failure_count} failures"
            )

    def _record_success(self):
        """Reset failure counter on success."""
        if self._failure_count > 0:
            self._failure_count = 0
            logger.info("Circuit breaker reset after successful operation")

    @property
    def client(self):
        """Lazy-load Redis client with connection pooling."""
        if self._client is None:
            try:
                import redis.asyncio as redis
                self._client = redis.from_url(
                    self._redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                    max_connections=settings.REDIS_MAX_CONNECTIONS,
                    socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
                    socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
                    socket_keepalive=True,
                    socket_keepalive_options={
                        socket.TCP_KEEPIDLE: 60,
                        socket.TCP_KEEPINTVL: 30,
                        socket.TCP_KEEPCNT: 3
                    },
                )
            except Exception as e:
                logger.warning(f"Redis init failed: {e}")
        return self._client

    @staticmethod
    def generate_key(prefix: str, params: Dict[str, Any]) -> str:
        """Generate deterministic cache key from parameters."""
        params_str = json.dumps(params, sort_keys=True, default=str)
        hash_value = hashlib.md5(params_str.encode()).hexdigest()
        return f"cache:{prefix}:{hash_value}"

    @staticmethod
    def tag_set_key(tag: Any) -> str:
        return f"tag:{_tag_name(tag)}"

    @staticmethod
    def tag_version_key(tag: Any) -> str:
        return f"tagver:{_tag_name(tag)}"

    async def get(self, key: str) -> Optional[Any]:
        """Get cached value by key with circuit breaker."""
        if self._is_circuit_open():
            return None
        try:
            if self.client is None:
                return None
            value = await self.client.get(key)
            self._record_success()
            if value is None:
                return None
            logger.debug(f"Cache hit: {key}")
            return json.loads(value)
        except Exception as e:
            logger.debug(f"Cache get error: {e}")
            self._record_failure()
            return None

    async def set(
        self,
        key: str,
        value: Any,
        ttl_seconds: int = 300,
        tags: Iterable[Any] = ()
    ) -> bool:
        """Set cached value with TTL and register it under ``tags``."""
        if self._is_circuit_open():
            return False
        try:
            if self.client is None:
                return False
            pipeline = self.client.pipeline()
            pipeline.setex(key, ttl_seconds, json.dumps(value))
            for tag in tags:
                # Tag sets carry no TTL so that no live entry loses its index
                pipeline.sadd(self.tag_set_key(tag), key)
            await pipeline.execute()
            self._record_success()
            return True
        except Exception as e:
            logger.debug(f"Cache set error: {e}")
            self._record_failure()
            return False

    async def delete(self, key: str) -> bool:
        """Delete cached value."""
        try:
            if self.client is None:
                return False
            await self.client.delete(key)
            return True
        except Exception as e:
            logger.debug(f"Cache delete error: {e}")
            return False

    async def get_tag_versions(self, tags: Iterable[Any]) -> Dict[str, int]:
        """Current generation counter of each tag (0 when never invalidated)."""
        names = sorted({_tag_name(tag) for tag in tags})
        if not names or self._is_circuit_open():
            return {}
        try:
            if self.client is None:
                return {}
            values = await self.client.mget([self.tag_version_key(name) for name in names])
            self._record_success()
            return {name: int(value or 0) for name, value in zip(names, values)}
        except Exception as e:
            logger.debug(f"Cache get_tag_versions error: {e}")
            self._record_failure()
            return {}

    async def invalidate_tags(self, tags: Iterable[Any]) -> int:
        """
        Mark every entry cached under any of ``tags`` as stale.

        Bumps each tag's generation and deletes the keys indexed under it.
        Entries registered only under other tags are untouched.

        Returns:
            Number of cache entries deleted.
        """
        names = sorted({_tag_name(tag) for tag in tags})
        if not names:
            return 0
        try:
            if self.client is None:
                return 0
            keys: List[str] = []
            for name in names:
                members = await self.client.smembers(self.tag_set_key(name))
                keys.extend(members)

            pipeline = self.client.pipeline()
            for name in names:
                pipeline.incr(self.tag_version_key(name))
            if keys:
                pipeline.delete(*set(keys))
            pipeline.delete(*[self.tag_set_key(name) for name in names])
            results = await pipeline.execute()
            self._record_success()
            return int(results[len(names)]) if keys else 0
        except Exception as e:
            logger.error(f"Cache invalidation failed for tags {names}: {e}")
            self._record_failure()
            return 0

    async def get_stats(self) -> Dict[str, Any]:
        """Redis server statistics for the health endpoint."""
        try:
            if self.client is None:
                return {}
            info = await self.client.info()
            return {
                "used_memory_human": info.get("used_memory_human"),
                "connected_clients": info.get("connected_clients"),
                "keyspace_hits": info.get("keyspace_hits", 0),
                "keyspace_misses": info.get("keyspace_misses", 0),
                "evicted_keys": info.get("evicted_keys"),
            }
        except Exception as e:
            logger.debug(f"Cache stats error: {e}")
            return {}

    async def healthcheck(self) -> bool:
        """Check Redis connection health."""
        try:
            if self.client is None:
                return False
            await self.client.ping()
            self._record_success()
            return True
        except Exception:
            self._record_failure()
            return False


def cached(*tags: Any, ttl_seconds: Optional[int] = None):
    """
    Cache an async read under ``tags``.

    The key covers the function, its arguments and the current generation of
    each tag. Arguments must be JSON-serializable and the return value must be
    plain JSON data. Exceptions propagate and are never cached.

    Example:
        @cached(CacheTag.ROUTINES)
        async def _load_routines(coach_id: str) -> list: ...
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        prefix = f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            versions = await cache_service.get_tag_versions(tags)
            key = CacheService.generate_key(
                prefix, {"args": args, "kwargs": kwargs, "versions": versions}
            )
            hit = await cache_service.get(key)
            if hit is not None:
                return hit["value"]

            value = await func(*args, **kwargs)
            await cache_service.set(
                key,
                {"value": value},
                ttl_seconds or settings.CACHE_TTL_DEFAULT,
                tags=tags,
            )
            return value

        wrapper.cache_tags = frozenset(_tag_name(tag) for tag in tags)
        return wrapper

    return decorator


# Global cache instance - lazy initialized
cache_service = CacheService(settings.redis_url_with_auth)
