"""Namespaced, fail-open cache for recognition results and lookups."""

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Protocol, TypeVar

from pydantic import BaseModel, Field

from meal_coach.domain.profile import HealthProfile
from meal_coach.domain.recognition import RecognitionResult

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class KeyValueStore(Protocol):
    """Backend interface: any store with GET, SETEX and DEL."""

    def get(self, key: str) -> str | None:
        """Return the stored string, or None when absent or expired."""

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Store a string that expires after ttl_seconds."""

    def delete(self, *keys: str) -> None:
        """Remove keys; missing keys are ignored."""


@dataclass
class _StoreEntry:
    value: str
    expires_at: datetime


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store for tests and single-instance deployments."""

    def __init__(self) -> None:
        self._entries: dict[str, _StoreEntry] = {}

    def get(self, key: str) -> str | None:
        """Return a stored value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Store a value with a TTL."""
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries[key] = _StoreEntry(value=value, expires_at=expires_at)

    def delete(self, *keys: str) -> None:
        for key in keys:
            self._entries.pop(key, None)


class CacheNamespace(StrEnum):
    """Key prefix per data class."""

    FOOD_RECOGNITION = "food:recognition:"
    USER_PROFILE = "user:profile:"
    COMMON_FOOD = "nutrition:common:"
    METRICS = "metrics:cache:"

    def key(self, suffix: str) -> str:
        return f"{self.value}{suffix}"


CACHE_TTL_SECONDS: dict[CacheNamespace, int] = {
    CacheNamespace.FOOD_RECOGNITION: 7 * 24 * 60 * 60,
    CacheNamespace.USER_PROFILE: 60 * 60,
    CacheNamespace.COMMON_FOOD: 30 * 24 * 60 * 60,
    CacheNamespace.METRICS: 24 * 60 * 60,
}


class CacheMetrics(BaseModel):
    """Approximate hit/miss/error counters shared by all instances."""

    hits: int = 0
    misses: int = 0
    errors: int = 0
    last_updated: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


@dataclass
class RecognitionCache:
    """Cache facade over a KeyValueStore.

    Caching is an optimization only: backend and serialization errors on read
    degrade to a miss, and errors on write are logged and dropped. Counters
    are updated with an unlocked read-modify-write, so concurrent requests
    can lose increments.
    """

    store: KeyValueStore
    enabled: bool = True

    def get(self, namespace: CacheNamespace, key: str) -> object | None:
        """Return the decoded JSON value stored under the namespaced key."""
        return self._get(namespace, key, lambda value: value)

    def set(
        self,
        namespace: CacheNamespace,
        key: str,
        value: object,
        ttl_seconds: int | None = None,
    ) -> None:
        """Store a JSON-serializable value; ttl defaults to the namespace TTL."""
        self._set(namespace, key, lambda: json.dumps(value), ttl_seconds)

    def invalidate(self, namespace: CacheNamespace, *keys: str) -> None:
        """Delete one or more keys from a namespace."""
        if not self.enabled or not keys:
            return
        try:
            self.store.delete(*(namespace.key(key) for key in keys))
        except Exception as exc:
            _logger.warning("Cache invalidate failed (%s): %s", namespace.name, exc)
            return
        _logger.info("Cache invalidated: namespace=%s count=%s", namespace.name, len(keys))

    def get_food_recognition(
        self, image_hash: str, user_id: str | None = None
    ) -> RecognitionResult | None:
        """Return a cached recognition result for an image hash."""
        return self._get(
            CacheNamespace.FOOD_RECOGNITION,
            _recognition_key(image_hash, user_id),
            RecognitionResult.model_validate,
        )

    def set_food_recognition(
        self,
        image_hash: str,
        result: RecognitionResult,
        user_id: str | None = None,
    ) -> None:
        """Cache a validated recognition result."""
        self._set(
            CacheNamespace.FOOD_RECOGNITION,
            _recognition_key(image_hash, user_id),
            result.to_json,
        )

    def invalidate_food_recognition(self, image_hash: str) -> None:
        """Drop the shared entry for an image, e.g. after inaccuracy feedback."""
        self.invalidate(CacheNamespace.FOOD_RECOGNITION, image_hash)

    def invalidate_food_recognitions(self, image_hashes: list[str]) -> None:
        self.invalidate(CacheNamespace.FOOD_RECOGNITION, *image_hashes)

    def get_user_profile(self, user_id: str) -> HealthProfile | None:
        return self._get(
            CacheNamespace.USER_PROFILE, user_id, HealthProfile.model_validate
        )

    def set_user_profile(self, user_id: str, profile: HealthProfile) -> None:
        self._set(
            CacheNamespace.USER_PROFILE,
            user_id,
            lambda: profile.model_dump_json(by_alias=True),
        )

    def invalidate_user_profile(self, user_id: str) -> None:
        """Drop a profile snapshot after the profile changes."""
        self.invalidate(CacheNamespace.USER_PROFILE, user_id)

    def get_common_food(self, food_name: str) -> object | None:
        """Return canonical nutrition data for a common food name."""
        return self.get(CacheNamespace.COMMON_FOOD, normalize_food_name(food_name))

    def set_common_food(self, food_name: str, nutrition_data: object) -> None:
        self.set(CacheNamespace.COMMON_FOOD, normalize_food_name(food_name), nutrition_data)

    def get_metrics(self) -> CacheMetrics:
        """Return current counters; empty counters when unavailable."""
        if not self.enabled:
            return CacheMetrics()
        try:
            raw = self.store.get(CacheNamespace.METRICS.value)
            if raw:
                return CacheMetrics.model_validate_json(raw)
        except Exception as exc:
            _logger.warning("Cache metrics read failed: %s", exc)
        return CacheMetrics()

    def clear_metrics(self) -> None:
        if not self.enabled:
            return
        try:
            self.store.delete(CacheNamespace.METRICS.value)
        except Exception as exc:
            _logger.warning("Cache metrics clear failed: %s", exc)

    def _get(
        self,
        namespace: CacheNamespace,
        key: str,
        parse: Callable[[object], T],
    ) -> T | None:
        if not self.enabled:
            return None
        try:
            raw = self.store.get(namespace.key(key))
            if raw is None:
                self._record(namespace, "misses")
                return None
            value = parse(json.loads(raw))
        except Exception as exc:
            _logger.warning("Cache read failed (%s): %s", namespace.name, exc)
            self._record(namespace, "errors")
            return None
        self._record(namespace, "hits")
        return value

    def _set(
        self,
        namespace: CacheNamespace,
        key: str,
        serialize: Callable[[], str],
        ttl_seconds: int | None = None,
    ) -> None:
        if not self.enabled:
            return
        ttl = ttl_seconds if ttl_seconds is not None else CACHE_TTL_SECONDS[namespace]
        try:
            self.store.setex(namespace.key(key), ttl, serialize())
        except Exception as exc:
            _logger.warning("Cache write failed (%s): %s", namespace.name, exc)
            self._record(namespace, "errors")

    def _record(self, namespace: CacheNamespace, counter: str) -> None:
        """Bump a shared counter; never raises."""
        if namespace is CacheNamespace.METRICS:
            return
        metrics = self.get_metrics()
        setattr(metrics, counter, getattr(metrics, counter) + 1)
        metrics.last_updated = datetime.now(tz=UTC)
        try:
            self.store.setex(
                CacheNamespace.METRICS.value,
                CACHE_TTL_SECONDS[CacheNamespace.METRICS],
                metrics.model_dump_json(),
            )
        except Exception as exc:
            _logger.warning("Cache metrics update failed: %s", exc)


def normalize_food_name(food_name: str) -> str:
    """Lowercase, trim and join words with underscores."""
    return re.sub(r"\s+", "_", food_name.strip().lower())


def _recognition_key(image_hash: str, user_id: str | None) -> str:
    if user_id:
        return f"{image_hash}:{user_id}"
    return image_hash
