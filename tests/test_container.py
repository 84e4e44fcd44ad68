"""Tests for container wiring."""

import asyncio

from meal_coach.containers import build_container
from meal_coach.domain.models import Language
from meal_coach.services.cache import InMemoryKeyValueStore
from meal_coach.services.profiles import InMemoryProfileProvider


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.pipeline is not None
    assert container.pipeline.downloader is container.image_downloader
    assert isinstance(container.cache.store, InMemoryKeyValueStore)
    assert container.recognizer.model == "gpt-4o-mini"
    assert container.recognizer.timeout_seconds == 45.0
    asyncio.run(container.close_resources())


def test_build_container_applies_settings(settings, lose_weight_profile) -> None:
    settings = settings.model_copy(
        update={
            "enable_caching": False,
            "image_max_dimension": 512,
            "personalized_cache": True,
            "default_language": "zh-CN",
        }
    )
    provider = InMemoryProfileProvider({"user-1": lose_weight_profile})

    container = build_container(settings, profile_provider=provider)

    assert container.cache.enabled is False
    assert container.normalizer.max_dimension == 512
    assert container.pipeline.personalized_cache is True
    assert container.pipeline.context().language is Language.ZH_CN
    assert container.profile_service.get_profile("user-1") == lose_weight_profile
    asyncio.run(container.close_resources())
