"""Tests for the recognition cache."""

from meal_coach.services.cache import (
    CACHE_TTL_SECONDS,
    CacheNamespace,
    InMemoryKeyValueStore,
    RecognitionCache,
    normalize_food_name,
)
from tests.conftest import CountingKeyValueStore, FailingKeyValueStore, make_result


def test_food_recognition_roundtrip(cache: RecognitionCache) -> None:
    result = make_result()

    assert cache.get_food_recognition("abc") is None
    cache.set_food_recognition("abc", result)

    assert cache.get_food_recognition("abc") == result


def test_food_recognition_uses_prefix_and_ttl(
    cache: RecognitionCache, store: CountingKeyValueStore
) -> None:
    cache.set_food_recognition("abc", make_result())

    assert store.ttls["food:recognition:abc"] == 7 * 24 * 60 * 60


def test_user_specific_entries_are_independent(cache: RecognitionCache) -> None:
    shared = make_result()
    personal = make_result(mealContext="dinner")

    cache.set_food_recognition("abc", shared)
    cache.set_food_recognition("abc", personal, user_id="user-1")

    assert cache.get_food_recognition("abc") == shared
    assert cache.get_food_recognition("abc", "user-1") == personal
    assert cache.get_food_recognition("abc", "user-2") is None


def test_namespace_ttls(
    cache: RecognitionCache, store: CountingKeyValueStore, lose_weight_profile
) -> None:
    cache.set_user_profile("user-1", lose_weight_profile)
    cache.set_common_food("Chicken Rice", {"calories": 600})

    assert store.ttls["user:profile:user-1"] == 60 * 60
    assert store.ttls["nutrition:common:chicken_rice"] == 30 * 24 * 60 * 60
    assert CACHE_TTL_SECONDS[CacheNamespace.METRICS] == 24 * 60 * 60


def test_explicit_ttl_overrides_namespace_default(
    cache: RecognitionCache, store: CountingKeyValueStore
) -> None:
    cache.set(CacheNamespace.COMMON_FOOD, "laksa", {"calories": 700}, ttl_seconds=60)

    assert store.ttls["nutrition:common:laksa"] == 60
    assert cache.get(CacheNamespace.COMMON_FOOD, "laksa") == {"calories": 700}


def test_user_profile_roundtrip_and_invalidate(
    cache: RecognitionCache, lose_weight_profile
) -> None:
    cache.set_user_profile("user-1", lose_weight_profile)
    assert cache.get_user_profile("user-1") == lose_weight_profile

    cache.invalidate_user_profile("user-1")

    assert cache.get_user_profile("user-1") is None


def test_common_food_names_are_normalized(cache: RecognitionCache) -> None:
    cache.set_common_food("  Chicken   Rice ", {"calories": 600})

    assert cache.get_common_food("chicken rice") == {"calories": 600}
    assert normalize_food_name(" Bak Chor\tMee ") == "bak_chor_mee"


def test_invalidate_multiple_recognitions(cache: RecognitionCache) -> None:
    cache.set_food_recognition("a", make_result())
    cache.set_food_recognition("b", make_result())
    cache.set_food_recognition("c", make_result())

    cache.invalidate_food_recognitions(["a", "b"])

    assert cache.get_food_recognition("a") is None
    assert cache.get_food_recognition("b") is None
    assert cache.get_food_recognition("c") is not None


def test_invalidate_single_recognition(cache: RecognitionCache) -> None:
    cache.set_food_recognition("a", make_result())

    cache.invalidate_food_recognition("a")

    assert cache.get_food_recognition("a") is None


def test_metrics_track_hits_and_misses(cache: RecognitionCache) -> None:
    cache.get_food_recognition("missing")
    cache.set_food_recognition("abc", make_result())
    cache.get_food_recognition("abc")
    cache.get_food_recognition("abc")

    metrics = cache.get_metrics()

    assert metrics.hits == 2
    assert metrics.misses == 1
    assert metrics.errors == 0
    assert metrics.hit_rate == 2 / 3


def test_clear_metrics(cache: RecognitionCache) -> None:
    cache.get_food_recognition("missing")

    cache.clear_metrics()

    assert cache.get_metrics().misses == 0
    assert cache.get_metrics().hit_rate == 0.0


def test_corrupt_entry_degrades_to_miss(
    cache: RecognitionCache, store: CountingKeyValueStore
) -> None:
    store.setex("food:recognition:abc", 60, "{not json")

    assert cache.get_food_recognition("abc") is None
    assert cache.get_metrics().errors == 1


def test_entry_violating_contract_degrades_to_miss(
    cache: RecognitionCache, store: CountingKeyValueStore
) -> None:
    store.setex("food:recognition:abc", 60, '{"foods": []}')

    assert cache.get_food_recognition("abc") is None


def test_backend_failures_never_raise(lose_weight_profile) -> None:
    store = FailingKeyValueStore()
    cache = RecognitionCache(store=store)

    cache.set_food_recognition("abc", make_result())
    assert cache.get_food_recognition("abc") is None
    cache.set_user_profile("user-1", lose_weight_profile)
    assert cache.get_user_profile("user-1") is None
    cache.invalidate_food_recognitions(["abc"])
    cache.clear_metrics()

    assert cache.get_metrics().hits == 0
    assert store.attempts > 0


def test_disabled_cache_never_touches_store(lose_weight_profile) -> None:
    store = CountingKeyValueStore()
    cache = RecognitionCache(store=store, enabled=False)

    cache.set_food_recognition("abc", make_result())
    assert cache.get_food_recognition("abc") is None
    cache.set_user_profile("user-1", lose_weight_profile)
    assert cache.get_user_profile("user-1") is None
    cache.set_common_food("laksa", {"calories": 700})
    assert cache.get_common_food("laksa") is None
    cache.invalidate_food_recognition("abc")
    cache.clear_metrics()
    assert cache.get_metrics().hits == 0

    assert store.calls == []


def test_in_memory_store_expires_entries() -> None:
    store = InMemoryKeyValueStore()

    store.setex("short", 0, "value")
    store.setex("long", 60, "value")

    assert store.get("short") is None
    assert store.get("long") == "value"
    store.delete("long", "absent")
    assert store.get("long") is None
