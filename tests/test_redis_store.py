"""Tests for the Redis key-value adapter."""

from meal_coach.adapters.redis_store import RedisKeyValueStore
from meal_coach.services.cache import RecognitionCache
from tests.conftest import make_result


class _FakeRedis:
    def __init__(self) -> None:
        self.values: dict[str, object] = {}
        self.ttls: dict[str, int] = {}
        self.closed = False

    def get(self, key: str) -> object:
        return self.values.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self.values[key] = value
        self.ttls[key] = ttl

    def delete(self, *keys: str) -> int:
        return sum(1 for key in keys if self.values.pop(key, None) is not None)

    def close(self) -> None:
        self.closed = True


def test_redis_store_roundtrip() -> None:
    client = _FakeRedis()
    store = RedisKeyValueStore(client=client)

    store.setex("food:recognition:abc", 60, "value")

    assert store.get("food:recognition:abc") == "value"
    assert client.ttls["food:recognition:abc"] == 60
    store.delete("food:recognition:abc")
    assert store.get("food:recognition:abc") is None


def test_redis_store_decodes_bytes() -> None:
    client = _FakeRedis()
    client.values["key"] = "值".encode()

    assert RedisKeyValueStore(client=client).get("key") == "值"


def test_redis_store_backs_recognition_cache() -> None:
    client = _FakeRedis()
    cache = RecognitionCache(store=RedisKeyValueStore(client=client))
    result = make_result()

    cache.set_food_recognition("abc", result)

    assert cache.get_food_recognition("abc") == result
    assert "metrics:cache:" in client.values


def test_redis_store_create_and_close() -> None:
    store = RedisKeyValueStore.create("redis://localhost:6379/0")

    assert store.client.connection_pool.connection_kwargs["decode_responses"] is True
    store.close()


def test_redis_store_close_releases_client() -> None:
    client = _FakeRedis()

    RedisKeyValueStore(client=client).close()

    assert client.closed is True
