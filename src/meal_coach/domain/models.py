"""Shared enumerations for the meal coach domain."""

from collections.abc import Mapping
from enum import Enum, StrEnum


class Goal(StrEnum):
    """Health goal chosen by the user."""

    LOSE_WEIGHT = "lose-weight"
    GAIN_MUSCLE = "gain-muscle"
    CONTROL_SUGAR = "control-sugar"
    MAINTAIN = "maintain"


class ActivityLevel(StrEnum):
    """Self-reported daily activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"


class TrainingType(StrEnum):
    NONE = "none"
    STRENGTH = "strength"
    CARDIO = "cardio"
    MIXED = "mixed"


class MealContext(StrEnum):
    """Meal slot a recognition result belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class NutriGrade(StrEnum):
    """Singapore HPB front-of-pack grade, A best and D worst."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"


class GILevel(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Language(StrEnum):
    """Languages supported for user-facing text."""

    EN = "en"
    ZH_CN = "zh-CN"
    ZH_TW = "zh-TW"

    @classmethod
    def resolve(cls, value: "str | Language | None") -> "Language":
        """Return a supported language, falling back to English."""
        if isinstance(value, Language):
            return value
        try:
            return cls(value or cls.EN)
        except ValueError:
            return cls.EN


def require_exhaustive(table: Mapping[Enum, object], keys: type[Enum], name: str) -> None:
    """Fail at import time when a lookup table misses an enum member."""
    missing = [member.value for member in keys if member not in table]
    if missing:
        raise RuntimeError(f"{name} is missing entries for: {', '.join(missing)}")
