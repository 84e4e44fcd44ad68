"""Contract validation and enrichment of AI-returned nutrition data."""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import TypeVar
from zoneinfo import ZoneInfo

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from meal_coach.domain.errors import ErrorType, ValidationFailure
from meal_coach.domain.models import GILevel, MealContext, NutriGrade
from meal_coach.domain.recognition import (
    NUTRIENTS,
    FoodItem,
    NutritionProfile,
    RecognitionResult,
)

_logger = logging.getLogger(__name__)

E = TypeVar("E", bound=StrEnum)

BREAKFAST_HOURS = range(6, 10)
LUNCH_HOURS = range(11, 14)
DINNER_HOURS = range(17, 21)


@dataclass
class RecognitionValidator:
    """Turns an untrusted AI payload into a RecognitionResult or a failure.

    Rules run in order and the first failure wins:

    1. ``foods`` is a non-empty list (``NO_FOOD_DETECTED``).
    2. every food has a name and all five nutrition ranges
       (``INCOMPLETE_FOOD_INFORMATION``).
    3. every range is numeric with ``0 <= min < max``
       (``INVALID_NUTRITION_RANGE``). Equal bounds are rejected.
    4. ``totalNutrition`` is present and passes the same range check.

    Low-confidence items are not a failure; callers decide how to warn.
    """

    timezone: str | None = None
    low_confidence_threshold: float = 60

    def validate(
        self, raw: object, meal_time: datetime | None = None
    ) -> RecognitionResult | ValidationFailure:
        """Validate and enrich a decoded JSON payload."""
        payload = raw if isinstance(raw, Mapping) else {}

        foods = _field(payload, "foods")
        if not isinstance(foods, list) or not foods:
            return _reject(ErrorType.NO_FOOD_DETECTED, "No food items detected")

        for index, food in enumerate(foods):
            if not isinstance(food, Mapping) or not _text(_field(food, "name")):
                return _reject(
                    ErrorType.INCOMPLETE_FOOD_INFORMATION,
                    f"foods[{index}] has no name",
                )
            missing = _missing_nutrients(_field(food, "nutrition"))
            if missing:
                return _reject(
                    ErrorType.INCOMPLETE_FOOD_INFORMATION,
                    f"foods[{index}] is missing nutrition data: {', '.join(missing)}",
                )

        for index, food in enumerate(foods):
            invalid = _invalid_ranges(_field(food, "nutrition"))
            if invalid:
                return _reject(
                    ErrorType.INVALID_NUTRITION_RANGE,
                    f"foods[{index}] has invalid ranges: {', '.join(invalid)}",
                )

        total = _field(payload, "totalNutrition")
        missing = _missing_nutrients(total)
        if missing:
            return _reject(
                ErrorType.INCOMPLETE_FOOD_INFORMATION,
                f"Missing total nutrition data: {', '.join(missing)}",
            )
        invalid = _invalid_ranges(total)
        if invalid:
            return _reject(
                ErrorType.INVALID_NUTRITION_RANGE,
                f"totalNutrition has invalid ranges: {', '.join(invalid)}",
            )

        meal_context = _enum_value(MealContext, _field(payload, "mealContext"))
        if meal_context is None:
            meal_context = detect_meal_context(meal_time, self.timezone)

        try:
            result = RecognitionResult(
                foods=[_build_food(food) for food in foods],
                total_nutrition=NutritionProfile.model_validate(total),
                meal_context=meal_context,
            )
        except ValidationError as exc:
            return _reject(ErrorType.INCOMPLETE_FOOD_INFORMATION, str(exc))

        low_confidence = self.low_confidence_items(result)
        if low_confidence:
            _logger.warning(
                "Low confidence recognition: %s",
                ", ".join(f"{food.name}={food.confidence:g}" for food in low_confidence),
            )
        return result

    def low_confidence_items(self, result: RecognitionResult) -> list[FoodItem]:
        """Items below the confidence threshold, for a soft warning."""
        return result.low_confidence_items(self.low_confidence_threshold)


def detect_meal_context(
    meal_time: datetime | None = None, timezone_name: str | None = None
) -> MealContext:
    """Map a meal time onto breakfast, lunch, dinner or snack."""
    tz = ZoneInfo(timezone_name) if timezone_name else None
    if meal_time is None:
        meal_time = datetime.now(tz=tz)
    elif tz is not None and meal_time.tzinfo is not None:
        meal_time = meal_time.astimezone(tz)

    hour = meal_time.hour
    if hour in BREAKFAST_HOURS:
        return MealContext.BREAKFAST
    if hour in LUNCH_HOURS:
        return MealContext.LUNCH
    if hour in DINNER_HOURS:
        return MealContext.DINNER
    return MealContext.SNACK


def _reject(error_type: ErrorType, detail: str) -> ValidationFailure:
    _logger.warning("Invalid recognition result (%s): %s", error_type, detail)
    return ValidationFailure(type=error_type, detail=detail)


def _field(data: Mapping, name: str) -> object:
    """Read a camelCase key, accepting its snake_case spelling too."""
    if name in data:
        return data[name]
    return data.get(to_snake(name))


def _text(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _missing_nutrients(nutrition: object) -> list[str]:
    if not isinstance(nutrition, Mapping):
        return list(NUTRIENTS)
    return [
        nutrient
        for nutrient in NUTRIENTS
        if not isinstance(nutrition.get(nutrient), Mapping)
    ]


def _invalid_ranges(nutrition: Mapping) -> list[str]:
    return [
        nutrient
        for nutrient in NUTRIENTS
        if not _valid_range(nutrition[nutrient])
    ]


def _valid_range(value: Mapping) -> bool:
    low = value.get("min")
    high = value.get("max")
    if not (_is_number(low) and _is_number(high)):
        return False
    return 0 <= low < high


def _is_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _enum_value(enum_cls: type[E], value: object) -> E | None:
    """Match a loosely formatted string against an enum, ignoring case."""
    if not isinstance(value, str):
        return None
    wanted = value.strip().lower()
    for member in enum_cls:
        if member.value.lower() == wanted:
            return member
    return None


def _build_food(food: Mapping) -> FoodItem:
    name = _field(food, "name")
    confidence = _field(food, "confidence")
    modifiers = _field(food, "modifiers")
    return FoodItem(
        name=name,
        name_local=_text(_field(food, "nameLocal")) or name,
        confidence=min(max(confidence, 0), 100) if _is_number(confidence) else 0,
        portion=_text(_field(food, "portion")) or "",
        nutrition=NutritionProfile.model_validate(_field(food, "nutrition")),
        nutri_grade=_enum_value(NutriGrade, _field(food, "nutriGrade")),
        gi_level=_enum_value(GILevel, _field(food, "giLevel")),
        is_hawker_food=_field(food, "isHawkerFood") is True,
        improvement_tip=_text(_field(food, "improvementTip")),
        modifiers=[str(item) for item in modifiers] if isinstance(modifiers, list) else [],
    )
