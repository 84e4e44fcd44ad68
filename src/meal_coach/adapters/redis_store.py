"""Redis-backed key-value store."""

from dataclasses import dataclass

from redis import Redis

from meal_coach.services.cache import KeyValueStore


@dataclass
class RedisKeyValueStore(KeyValueStore):
    """Key-value store backed by a Redis client."""

    client: Redis

    @classmethod
    def create(cls, url: str, timeout_seconds: float = 2.0) -> "RedisKeyValueStore":
        """Create a store from a redis:// or rediss:// URL."""
        client = Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=timeout_seconds,
            socket_connect_timeout=timeout_seconds,
        )
        return cls(client=client)

    def get(self, key: str) -> str | None:
        value = self.client.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        self.client.setex(key, ttl_seconds, value)

    def delete(self, *keys: str) -> None:
        if keys:
            self.client.delete(*keys)

    def close(self) -> None:
        """Release pooled connections."""
        self.client.close()
