"""Domain models for daily targets and health ratings."""

from dataclasses import dataclass, field
from enum import StrEnum


@dataclass(frozen=True)
class DailyTarget:
    """Daily calorie (kcal), macro (g) and sodium (mg) budget."""

    calories: float
    protein: float
    carbs: float
    fat: float
    sodium: float


class RatingLevel(StrEnum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class FactorStatus(StrEnum):
    GOOD = "good"
    MODERATE = "moderate"
    POOR = "poor"


class FactorName(StrEnum):
    """Scored dimensions of a meal."""

    CALORIES = "Calories"
    SODIUM = "Sodium"
    FAT = "Fat"
    BALANCE = "Balance"
    NUTRI_GRADE = "Nutri-Grade"
    GI_LEVEL = "GI Level"


class FactorNote(StrEnum):
    """Message key describing the outcome of a factor evaluation."""

    CALORIES_APPROPRIATE = "calories.appropriate"
    CALORIES_SLIGHTLY_HIGH = "calories.slightly_high"
    CALORIES_SLIGHTLY_LOW = "calories.slightly_low"
    CALORIES_TOO_HIGH = "calories.too_high"
    CALORIES_TOO_LOW = "calories.too_low"
    SODIUM_LOW = "sodium.low"
    SODIUM_MODERATE = "sodium.moderate"
    SODIUM_HIGH = "sodium.high"
    SODIUM_VERY_HIGH = "sodium.very_high"
    FAT_HEALTHY = "fat.healthy"
    FAT_MODERATE = "fat.moderate"
    FAT_HIGH = "fat.high"
    BALANCE_GOOD = "balance.good"
    BALANCE_MODERATE = "balance.moderate"
    BALANCE_POOR = "balance.poor"
    NUTRI_GRADE_UNKNOWN = "nutri_grade.unknown"
    NUTRI_GRADE_OK = "nutri_grade.ok"
    NUTRI_GRADE_HIGH_SUGAR = "nutri_grade.high_sugar"
    NUTRI_GRADE_VERY_HIGH_SUGAR = "nutri_grade.very_high_sugar"
    GI_UNKNOWN = "gi.unknown"
    GI_HEALTHY = "gi.healthy"
    GI_HIGH = "gi.high"

    @property
    def is_high(self) -> bool:
        return self in {FactorNote.CALORIES_SLIGHTLY_HIGH, FactorNote.CALORIES_TOO_HIGH}

    @property
    def is_low(self) -> bool:
        return self in {FactorNote.CALORIES_SLIGHTLY_LOW, FactorNote.CALORIES_TOO_LOW}


@dataclass(frozen=True)
class FactorEvaluation:
    """Outcome of scoring one factor."""

    name: FactorName
    status: FactorStatus
    message: str
    score: int
    note: FactorNote


class SuggestionKey(StrEnum):
    """Language-agnostic coaching suggestion."""

    SMALLER_PORTIONS = "smaller_portions"
    BALANCE_WITH_LIGHTER_MEALS = "balance_with_lighter_meals"
    ADD_PROTEIN_FOR_MUSCLE = "add_protein_for_muscle"
    REDUCE_SALTY_CONDIMENTS = "reduce_salty_condiments"
    DRINK_WATER = "drink_water"
    WATCH_SODIUM = "watch_sodium"
    REMOVE_VISIBLE_FAT = "remove_visible_fat"
    CHOOSE_STEAMED_OR_GRILLED = "choose_steamed_or_grilled"
    BALANCE_WITH_LOWER_FAT = "balance_with_lower_fat"
    ADD_PROTEIN_FOR_BALANCE = "add_protein_for_balance"
    REDUCE_REFINED_CARBS = "reduce_refined_carbs"
    SWAP_FOR_LOWER_GI = "swap_for_lower_gi"
    LESS_SUGAR = "less_sugar"
    HAWKER_LESS_GRAVY = "hawker_less_gravy"
    ITEM_IMPROVEMENT_TIP = "item_improvement_tip"
    EAT_SLOWLY = "eat_slowly"
    PROTEIN_THROUGHOUT_DAY = "protein_throughout_day"
    WHOLE_GRAINS = "whole_grains"


@dataclass(frozen=True)
class Suggestion:
    """Suggestion key plus the item it refers to, if any."""

    key: SuggestionKey
    item: str | None = None
    tip: str | None = None

    @property
    def dedup_key(self) -> tuple[SuggestionKey, str | None]:
        return (self.key, self.item)


@dataclass(frozen=True)
class HealthRating:
    """Personalized rating for one meal."""

    overall: RatingLevel
    score: int
    factors: list[FactorEvaluation]
    suggestions: list[str]
    suggestion_keys: list[Suggestion] = field(default_factory=list)
