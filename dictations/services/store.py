import logging
import re

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from dictations.config import Settings, get_settings
from dictations.errors import StorageError

logger = logging.getLogger(__name__)

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def escape_glob(prefix: str) -> str:
    return _GLOB_SPECIAL.sub(r"\\\1", prefix)


class KeyValueStore:
    """Redis-backed key-value store: put, get and prefix listing.

    Per-key operations are atomic; nothing spans keys.
    """

    def __init__(self, settings: Settings | None = None, redis: aioredis.Redis | None = None):
        self.settings = settings or get_settings()
        self._redis = redis

    async def start(self):
        if self._redis is None:
            self._redis = aioredis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                decode_responses=True,
            )
        await self._redis.ping()
        logger.info("Redis store connected on port %s", self.settings.redis_port)

    async def stop(self):
        if self._redis:
            await self._redis.aclose()

    async def put(self, key: str, value: str) -> None:
        try:
            await self._redis.set(key, value)
        except RedisError as e:
            raise StorageError(f"put {key!r} failed: {e}") from e

    async def get(self, key: str) -> str | None:
        try:
            return await self._redis.get(key)
        except RedisError as e:
            raise StorageError(f"get {key!r} failed: {e}") from e

    async def list_keys(self, prefix: str, limit: int) -> list[str]:
        """Keys starting with ``prefix``, lexically ordered, at most ``limit``."""
        try:
            keys = [k async for k in self._redis.scan_iter(match=escape_glob(prefix) + "*")]
        except RedisError as e:
            raise StorageError(f"list {prefix!r} failed: {e}") from e
        return sorted(keys)[:limit]
