"""Shared test fixtures."""

import asyncio
import copy
import io
from dataclasses import dataclass, field

import pytest
from PIL import Image

from meal_coach.config import Settings
from meal_coach.domain.models import ActivityLevel, Gender, Goal
from meal_coach.domain.profile import HealthProfile
from meal_coach.domain.recognition import RecognitionResult
from meal_coach.services.cache import InMemoryKeyValueStore, RecognitionCache
from meal_coach.services.images import ImageNormalizer
from meal_coach.services.pipeline import MealAnalysisPipeline
from meal_coach.services.profiles import InMemoryProfileProvider, ProfileService
from meal_coach.services.rating import RatingEngine
from meal_coach.services.validation import RecognitionValidator
from meal_coach.services.vision import FoodRecognizer, VisionClient


def nutrition(
    calories: tuple[float, float],
    protein: tuple[float, float],
    carbs: tuple[float, float],
    fat: tuple[float, float],
    sodium: tuple[float, float],
) -> dict[str, dict[str, float]]:
    """Build a camelCase nutrition block from (min, max) pairs."""
    values = {
        "calories": calories,
        "protein": protein,
        "carbs": carbs,
        "fat": fat,
        "sodium": sodium,
    }
    return {name: {"min": low, "max": high} for name, (low, high) in values.items()}


CHICKEN_RICE_NUTRITION = nutrition((500, 600), (30, 35), (60, 70), (15, 20), (600, 800))
FRIED_CHICKEN_NUTRITION = nutrition(
    (800, 1000), (40, 50), (50, 60), (50, 60), (1500, 2000)
)

CHICKEN_RICE_PAYLOAD: dict[str, object] = {
    "foods": [
        {
            "name": "Chicken Rice",
            "nameLocal": "海南鸡饭",
            "confidence": 95,
            "portion": "1 plate",
            "nutrition": CHICKEN_RICE_NUTRITION,
        }
    ],
    "totalNutrition": CHICKEN_RICE_NUTRITION,
    "mealContext": "lunch",
}

FRIED_CHICKEN_PAYLOAD: dict[str, object] = {
    "foods": [
        {
            "name": "Fried Chicken",
            "nameLocal": "炸鸡",
            "confidence": 90,
            "portion": "3 pieces",
            "nutrition": FRIED_CHICKEN_NUTRITION,
        }
    ],
    "totalNutrition": FRIED_CHICKEN_NUTRITION,
    "mealContext": "dinner",
}


def build_payload(
    base: dict[str, object] | None = None, **overrides: object
) -> dict[str, object]:
    """Deep copy of a payload with top-level overrides."""
    data = copy.deepcopy(base or CHICKEN_RICE_PAYLOAD)
    data.update(overrides)
    return data


def make_result(
    base: dict[str, object] | None = None, **overrides: object
) -> RecognitionResult:
    return RecognitionResult.model_validate(build_payload(base, **overrides))


def make_image(
    size: tuple[int, int] = (64, 48),
    image_format: str = "PNG",
    color: tuple[int, int, int] = (200, 120, 40),
    **save_options: object,
) -> bytes:
    """Render a two-tone test image in the given container format."""
    image = Image.new("RGB", size, color)
    image.paste((20, 160, 90), (0, 0, size[0] // 2, size[1] // 2))
    output = io.BytesIO()
    image.save(output, format=image_format, **save_options)
    return output.getvalue()


class CountingKeyValueStore(InMemoryKeyValueStore):
    """In-memory store that records every backend call."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, str]] = []
        self.ttls: dict[str, int] = {}

    def get(self, key: str) -> str | None:
        self.calls.append(("get", key))
        return super().get(key)

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        self.calls.append(("setex", key))
        self.ttls[key] = ttl_seconds
        super().setex(key, ttl_seconds, value)

    def delete(self, *keys: str) -> None:
        for key in keys:
            self.calls.append(("delete", key))
        super().delete(*keys)


class FailingKeyValueStore:
    """Store whose every operation raises, like an unreachable Redis."""

    def __init__(self) -> None:
        self.attempts = 0

    def get(self, key: str) -> str | None:
        self.attempts += 1
        raise ConnectionError("backend unavailable")

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        self.attempts += 1
        raise ConnectionError("backend unavailable")

    def delete(self, *keys: str) -> None:
        self.attempts += 1
        raise ConnectionError("backend unavailable")


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: dict[str, object] = field(default_factory=build_payload)
    error: Exception | None = None
    delay_seconds: float = 0.0
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        image_data_url: str | None,
        max_tokens: int,
        temperature: float,
    ) -> dict[str, object]:
        self.calls.append(
            {
                "model": model,
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "image_data_url": image_data_url,
            }
        )
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.payload)


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key", redis_url=None)


@pytest.fixture
def lose_weight_profile() -> HealthProfile:
    return HealthProfile(
        height=170,
        weight=80,
        age=30,
        gender=Gender.MALE,
        goal=Goal.LOSE_WEIGHT,
        activity_level=ActivityLevel.LIGHT,
    )


@pytest.fixture
def gain_muscle_profile() -> HealthProfile:
    return HealthProfile(
        height=175,
        weight=70,
        age=25,
        gender=Gender.MALE,
        goal=Goal.GAIN_MUSCLE,
        activity_level=ActivityLevel.MODERATE,
    )


@pytest.fixture
def store() -> CountingKeyValueStore:
    return CountingKeyValueStore()


@pytest.fixture
def cache(store: CountingKeyValueStore) -> RecognitionCache:
    return RecognitionCache(store=store)


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def profile_provider(lose_weight_profile: HealthProfile) -> InMemoryProfileProvider:
    return InMemoryProfileProvider({"user-1": lose_weight_profile})


@pytest.fixture
def pipeline(
    cache: RecognitionCache,
    vision_client: FakeVisionClient,
    profile_provider: InMemoryProfileProvider,
) -> MealAnalysisPipeline:
    recognizer = FoodRecognizer(
        client=vision_client,
        model="gpt-4o-mini",
        validator=RecognitionValidator(timezone="Asia/Singapore"),
        timeout_seconds=1.0,
    )
    return MealAnalysisPipeline(
        normalizer=ImageNormalizer(),
        cache=cache,
        recognizer=recognizer,
        rating_engine=RatingEngine(),
        profiles=ProfileService(provider=profile_provider, cache=cache),
    )
