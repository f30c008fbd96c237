# -*- coding: utf-8 -*-
from typing import Any, Optional

import orjson as json
from loguru import logger
from redis.asyncio import Redis

from app import config


class Cache:
    """
    Key/value cache on top of Redis.

    Values are stored as JSON. Keys are namespaced with `config.CACHE_KEY_PREFIX`, both on
    write and when invalidating by pattern.
    """

    def __init__(self, redis: Redis, prefix: str = config.CACHE_KEY_PREFIX) -> None:
        self._cache = redis
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def get(self, key: str) -> Optional[Any]:
        """
        Fetches a value from cache.

        Args:
            key (str): The key, without prefix.

        Returns:
            Optional[Any]: The decoded value, or None on a miss. Undecodable entries are
                dropped and reported as a miss.
        """
        full_key = self._key(key)
        raw: bytes = await self._cache.get(full_key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning(f"Dropping undecodable cache entry {full_key}: {exc}")
            await self._cache.delete(full_key)
            return None

    async def set(self, key: str, value: Any, ttl: int = config.CACHE_DEFAULT_TTL) -> None:
        """
        Stores a value in cache.

        Args:
            key (str): The key, without prefix.
            value (Any): Any orjson-serializable value.
            ttl (int, optional): Expiration time in seconds. Defaults to
                config.CACHE_DEFAULT_TTL.
        """
        await self._cache.set(self._key(key), json.dumps(value), ex=ttl)

    async def invalidate(self, pattern: str) -> int:
        """
        Deletes every key matching a glob pattern.

        Args:
            pattern (str): The pattern, without prefix (e.g. "analytics:*").

        Returns:
            int: How many keys were deleted.
        """
        keys = [key async for key in self._cache.scan_iter(match=self._key(pattern))]
        if not keys:
            return 0
        deleted = await self._cache.delete(*keys)
        logger.debug(f"Invalidated {deleted} cache keys matching {pattern}")
        return deleted

    async def ping(self) -> bool:
        return await self._cache.ping()

    async def close(self) -> None:
        await self._cache.aclose()


def build_cache() -> Cache:
    return Cache(
        Redis(
            host=config.REDIS_HOST,
            port=config.REDIS_PORT,
            db=config.REDIS_DB,
            password=config.REDIS_PASSWORD,
        )
    )
