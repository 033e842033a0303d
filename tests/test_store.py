import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from dictations.errors import StorageError
from dictations.services.store import KeyValueStore, escape_glob


def _redis_with_keys(keys):
    redis = MagicMock()

    async def scan_iter(match=None):
        for key in keys:
            yield key

    redis.scan_iter = MagicMock(side_effect=scan_iter)
    return redis


def test_escape_glob():
    assert escape_glob("al*ce:dictations:") == r"al\*ce:dictations:"
    assert escape_glob("a[b]?") == r"a\[b\]\?"
    assert escape_glob("plain") == "plain"


def test_list_keys_sorted_and_capped(settings):
    redis = _redis_with_keys(["u:dictations:2024-9-1@0:0:0", "u:dictations:2024-10-1@0:0:0", "u:dictations:2024-1-1@0:0:0"])
    store = KeyValueStore(settings, redis=redis)

    keys = asyncio.run(store.list_keys("u:dictations:", 2))

    assert keys == ["u:dictations:2024-1-1@0:0:0", "u:dictations:2024-10-1@0:0:0"]
    redis.scan_iter.assert_called_once_with(match="u:dictations:*")


def test_put_and_get_pass_through(settings):
    redis = MagicMock()
    redis.set = AsyncMock()
    redis.get = AsyncMock(return_value="{}")
    store = KeyValueStore(settings, redis=redis)

    asyncio.run(store.put("k", "v"))
    assert asyncio.run(store.get("k")) == "{}"
    redis.set.assert_awaited_once_with("k", "v")


def test_redis_errors_become_storage_errors(settings):
    redis = MagicMock()
    redis.set = AsyncMock(side_effect=RedisConnectionError("down"))
    redis.get = AsyncMock(side_effect=RedisConnectionError("down"))
    store = KeyValueStore(settings, redis=redis)

    with pytest.raises(StorageError):
        asyncio.run(store.put("k", "v"))
    with pytest.raises(StorageError):
        asyncio.run(store.get("k"))
