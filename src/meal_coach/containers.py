"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from meal_coach.adapters.image_downloader import HttpxImageDownloader
from meal_coach.adapters.openai_vision_client import OpenAIVisionClient
from meal_coach.adapters.redis_store import RedisKeyValueStore
from meal_coach.app_logging import configure_logging
from meal_coach.config import Settings
from meal_coach.domain.models import Language
from meal_coach.services.cache import InMemoryKeyValueStore, KeyValueStore, RecognitionCache
from meal_coach.services.images import ImageNormalizer
from meal_coach.services.pipeline import MealAnalysisPipeline
from meal_coach.services.profiles import (
    InMemoryProfileProvider,
    ProfileProvider,
    ProfileService,
)
from meal_coach.services.rating import RatingEngine
from meal_coach.services.targets import DailyTargetCalculator
from meal_coach.services.validation import RecognitionValidator
from meal_coach.services.vision import FoodRecognizer


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    normalizer: ImageNormalizer
    cache: RecognitionCache
    validator: RecognitionValidator
    recognizer: FoodRecognizer
    calculator: DailyTargetCalculator
    rating_engine: RatingEngine
    profile_service: ProfileService
    pipeline: MealAnalysisPipeline
    image_downloader: HttpxImageDownloader
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    profile_provider: ProfileProvider | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)

    redis_store: RedisKeyValueStore | None = None
    store: KeyValueStore
    if resolved_settings.redis_url:
        redis_store = RedisKeyValueStore.create(resolved_settings.redis_url)
        store = redis_store
    else:
        store = InMemoryKeyValueStore()
    cache = RecognitionCache(store=store, enabled=resolved_settings.enable_caching)

    normalizer = ImageNormalizer(
        max_dimension=resolved_settings.image_max_dimension,
        jpeg_quality=resolved_settings.image_jpeg_quality,
    )
    validator = RecognitionValidator(
        timezone=resolved_settings.timezone,
        low_confidence_threshold=resolved_settings.low_confidence_threshold,
    )
    openai_client = OpenAIVisionClient.create(resolved_settings.openai_api_key)
    recognizer = FoodRecognizer(
        client=openai_client,
        model=resolved_settings.openai_model,
        validator=validator,
        max_tokens=resolved_settings.openai_max_tokens,
        temperature=resolved_settings.openai_temperature,
        timeout_seconds=resolved_settings.recognition_timeout_seconds,
    )
    calculator = DailyTargetCalculator()
    rating_engine = RatingEngine(calculator=calculator)
    profile_service = ProfileService(
        provider=profile_provider or InMemoryProfileProvider(),
        cache=cache,
    )
    image_downloader = HttpxImageDownloader.create(
        max_bytes=resolved_settings.image_max_download_bytes
    )
    pipeline = MealAnalysisPipeline(
        normalizer=normalizer,
        cache=cache,
        recognizer=recognizer,
        rating_engine=rating_engine,
        profiles=profile_service,
        personalized_cache=resolved_settings.personalized_cache,
        downloader=image_downloader,
        default_language=Language.resolve(resolved_settings.default_language),
    )

    async def close_resources() -> None:
        await openai_client.close()
        await image_downloader.close()
        if redis_store is not None:
            redis_store.close()

    return AppContainer(
        settings=resolved_settings,
        normalizer=normalizer,
        cache=cache,
        validator=validator,
        recognizer=recognizer,
        calculator=calculator,
        rating_engine=rating_engine,
        profile_service=profile_service,
        pipeline=pipeline,
        image_downloader=image_downloader,
        close_resources=close_resources,
    )
