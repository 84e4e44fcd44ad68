"""Multi-factor health rating and coaching suggestions."""

import math
from dataclasses import dataclass, field

from meal_coach import localization
from meal_coach.domain.models import (
    GILevel,
    Goal,
    Language,
    MealContext,
    NutriGrade,
    require_exhaustive,
)
from meal_coach.domain.profile import HealthProfile
from meal_coach.domain.rating import (
    DailyTarget,
    FactorEvaluation,
    FactorName,
    FactorNote,
    FactorStatus,
    HealthRating,
    RatingLevel,
    Suggestion,
    SuggestionKey,
)
from meal_coach.domain.recognition import NutritionProfile, RecognitionResult
from meal_coach.services.targets import (
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
    DailyTargetCalculator,
)

MAX_SUGGESTIONS = 4
GREEN_THRESHOLD = 80
YELLOW_THRESHOLD = 60

MEAL_CALORIE_SHARE: dict[MealContext, float] = {
    MealContext.BREAKFAST: 0.25,
    MealContext.LUNCH: 0.35,
    MealContext.DINNER: 0.30,
    MealContext.SNACK: 0.10,
}

GOAL_WEIGHTS: dict[Goal, dict[FactorName, float]] = {
    Goal.LOSE_WEIGHT: {
        FactorName.CALORIES: 0.30,
        FactorName.SODIUM: 0.15,
        FactorName.FAT: 0.20,
        FactorName.BALANCE: 0.10,
        FactorName.NUTRI_GRADE: 0.10,
        FactorName.GI_LEVEL: 0.15,
    },
    Goal.GAIN_MUSCLE: {
        FactorName.CALORIES: 0.15,
        FactorName.SODIUM: 0.15,
        FactorName.FAT: 0.10,
        FactorName.BALANCE: 0.30,
        FactorName.NUTRI_GRADE: 0.10,
        FactorName.GI_LEVEL: 0.20,
    },
    Goal.CONTROL_SUGAR: {
        FactorName.CALORIES: 0.15,
        FactorName.SODIUM: 0.15,
        FactorName.FAT: 0.10,
        FactorName.BALANCE: 0.10,
        FactorName.NUTRI_GRADE: 0.25,
        FactorName.GI_LEVEL: 0.25,
    },
    Goal.MAINTAIN: {
        FactorName.CALORIES: 0.25,
        FactorName.SODIUM: 0.20,
        FactorName.FAT: 0.15,
        FactorName.BALANCE: 0.15,
        FactorName.NUTRI_GRADE: 0.15,
        FactorName.GI_LEVEL: 0.10,
    },
}

# Ideal share of calories per macro, inclusive bounds in percent.
PROTEIN_BAND = (15, 30)
CARBS_BAND = (45, 65)
FAT_BAND = (20, 35)

GOAL_TIPS: dict[Goal, SuggestionKey | None] = {
    Goal.LOSE_WEIGHT: SuggestionKey.EAT_SLOWLY,
    Goal.GAIN_MUSCLE: SuggestionKey.PROTEIN_THROUGHOUT_DAY,
    Goal.CONTROL_SUGAR: SuggestionKey.WHOLE_GRAINS,
    Goal.MAINTAIN: None,
}

require_exhaustive(MEAL_CALORIE_SHARE, MealContext, "MEAL_CALORIE_SHARE")
require_exhaustive(GOAL_WEIGHTS, Goal, "GOAL_WEIGHTS")
require_exhaustive(GOAL_TIPS, Goal, "GOAL_TIPS")
for _goal, _weights in GOAL_WEIGHTS.items():
    require_exhaustive(_weights, FactorName, f"GOAL_WEIGHTS[{_goal}]")
    if not math.isclose(sum(_weights.values()), 1.0):
        raise RuntimeError(f"GOAL_WEIGHTS[{_goal}] must sum to 1.0")


@dataclass(frozen=True)
class MacroSplit:
    """Share of macro calories, in percent."""

    protein: float
    carbs: float
    fat: float


@dataclass
class RatingEngine:
    """Scores a validated meal against a user's daily target and goal."""

    calculator: DailyTargetCalculator = field(default_factory=DailyTargetCalculator)

    def rate(
        self,
        result: RecognitionResult,
        profile: HealthProfile,
        language: Language | str = Language.EN,
    ) -> HealthRating:
        """Compute the profile's daily target and evaluate the meal."""
        target = self.calculator.compute(profile)
        return self.evaluate(result, target, profile.goal, language)

    def evaluate(
        self,
        result: RecognitionResult,
        target: DailyTarget,
        goal: Goal | str,
        language: Language | str = Language.EN,
    ) -> HealthRating:
        """Evaluate each factor, weight by goal and build suggestions."""
        lang = Language.resolve(language)
        goal = Goal(goal)
        factors = [
            evaluate_calories(result, target, goal, lang),
            evaluate_sodium(result, lang),
            evaluate_fat(result, lang),
            evaluate_balance(result, lang),
            evaluate_nutri_grade(result, lang),
            evaluate_gi(result, lang),
        ]
        score = weighted_score(factors, goal)
        suggestions = generate_suggestions(factors, result, goal)
        return HealthRating(
            overall=rating_level(score),
            score=score,
            factors=factors,
            suggestions=[localization.render_suggestion(s, lang) for s in suggestions],
            suggestion_keys=suggestions,
        )


def evaluate_calories(
    result: RecognitionResult, target: DailyTarget, goal: Goal, language: Language
) -> FactorEvaluation:
    """Compare meal calories with the expected share of the daily target."""
    avg_calories = result.total_nutrition.calories.average
    percent_of_daily = avg_calories / target.calories * 100 if target.calories > 0 else 0.0
    expected_percent = MEAL_CALORIE_SHARE[result.meal_context] * 100
    deviation = abs(percent_of_daily - expected_percent)
    over = percent_of_daily > expected_percent

    if deviation < 10:
        score, status, note = 100, FactorStatus.GOOD, FactorNote.CALORIES_APPROPRIATE
    elif deviation < 20:
        score, status = 70, FactorStatus.MODERATE
        note = FactorNote.CALORIES_SLIGHTLY_HIGH if over else FactorNote.CALORIES_SLIGHTLY_LOW
    else:
        score, status = 40, FactorStatus.POOR
        note = FactorNote.CALORIES_TOO_HIGH if over else FactorNote.CALORIES_TOO_LOW

    under = percent_of_daily < expected_percent
    if (goal is Goal.LOSE_WEIGHT and under) or (goal is Goal.GAIN_MUSCLE and over):
        score = min(100, score + 10)
        if score >= GREEN_THRESHOLD:
            status = FactorStatus.GOOD

    return _factor(
        FactorName.CALORIES,
        status,
        score,
        note,
        language,
        meal=localization.meal_name(result.meal_context, language),
        kcal=round(avg_calories),
    )


def evaluate_sodium(result: RecognitionResult, language: Language) -> FactorEvaluation:
    """Absolute sodium thresholds for a single meal."""
    avg_sodium = result.total_nutrition.sodium.average
    if avg_sodium < 500:
        score, status, note = 100, FactorStatus.GOOD, FactorNote.SODIUM_LOW
    elif avg_sodium < 700:
        score, status, note = 80, FactorStatus.GOOD, FactorNote.SODIUM_MODERATE
    elif avg_sodium < 1000:
        score, status, note = 60, FactorStatus.MODERATE, FactorNote.SODIUM_HIGH
    else:
        score, status, note = 30, FactorStatus.POOR, FactorNote.SODIUM_VERY_HIGH
    return _factor(
        FactorName.SODIUM, status, score, note, language, mg=round(avg_sodium)
    )


def evaluate_fat(result: RecognitionResult, language: Language) -> FactorEvaluation:
    """Share of the meal's calories coming from fat."""
    avg_fat = result.total_nutrition.fat.average
    avg_calories = result.total_nutrition.calories.average
    fat_percent = avg_fat * KCAL_PER_G_FAT / avg_calories * 100
    if fat_percent < 25:
        score, status, note = 100, FactorStatus.GOOD, FactorNote.FAT_HEALTHY
    elif fat_percent < 35:
        score, status, note = 70, FactorStatus.MODERATE, FactorNote.FAT_MODERATE
    else:
        score, status, note = 40, FactorStatus.POOR, FactorNote.FAT_HIGH
    return _factor(
        FactorName.FAT,
        status,
        score,
        note,
        language,
        grams=round(avg_fat),
        percent=round(fat_percent),
    )


def evaluate_balance(result: RecognitionResult, language: Language) -> FactorEvaluation:
    """Count how many macros fall inside their ideal calorie bands."""
    split = macro_split(result.total_nutrition)
    in_range = sum(
        (
            _within(split.protein, PROTEIN_BAND),
            _within(split.carbs, CARBS_BAND),
            _within(split.fat, FAT_BAND),
        )
    )
    if in_range == 3:
        score, status, note = 100, FactorStatus.GOOD, FactorNote.BALANCE_GOOD
    elif in_range == 2:
        score, status, note = 70, FactorStatus.MODERATE, FactorNote.BALANCE_MODERATE
    else:
        score, status, note = 40, FactorStatus.POOR, FactorNote.BALANCE_POOR
    return _factor(
        FactorName.BALANCE,
        status,
        score,
        note,
        language,
        protein=round(split.protein),
        carbs=round(split.carbs),
        fat=round(split.fat),
    )


def evaluate_nutri_grade(
    result: RecognitionResult, language: Language
) -> FactorEvaluation:
    """Rate by the worst Nutri-Grade among the items."""
    grade = worst_nutri_grade(result)
    if grade is None:
        return _factor(
            FactorName.NUTRI_GRADE,
            FactorStatus.GOOD,
            100,
            FactorNote.NUTRI_GRADE_UNKNOWN,
            language,
        )
    if grade is NutriGrade.C:
        score, status, note = 60, FactorStatus.MODERATE, FactorNote.NUTRI_GRADE_HIGH_SUGAR
    elif grade is NutriGrade.D:
        score, status, note = (
            30,
            FactorStatus.POOR,
            FactorNote.NUTRI_GRADE_VERY_HIGH_SUGAR,
        )
    else:
        score, status, note = 100, FactorStatus.GOOD, FactorNote.NUTRI_GRADE_OK
    return _factor(
        FactorName.NUTRI_GRADE, status, score, note, language, grade=grade.value
    )


def evaluate_gi(result: RecognitionResult, language: Language) -> FactorEvaluation:
    levels = [food.gi_level for food in result.foods if food.gi_level is not None]
    if not levels:
        return _factor(
            FactorName.GI_LEVEL, FactorStatus.GOOD, 100, FactorNote.GI_UNKNOWN, language
        )
    if GILevel.HIGH in levels:
        return _factor(
            FactorName.GI_LEVEL, FactorStatus.POOR, 40, FactorNote.GI_HIGH, language
        )
    return _factor(
        FactorName.GI_LEVEL, FactorStatus.GOOD, 100, FactorNote.GI_HEALTHY, language
    )


def weighted_score(factors: list[FactorEvaluation], goal: Goal) -> int:
    """Weighted average of factor scores, rounded half up to an int."""
    weights = GOAL_WEIGHTS[goal]
    total = sum(factor.score * weights[factor.name] for factor in factors)
    return min(100, max(0, math.floor(total + 0.5)))


def rating_level(score: int) -> RatingLevel:
    if score >= GREEN_THRESHOLD:
        return RatingLevel.GREEN
    if score >= YELLOW_THRESHOLD:
        return RatingLevel.YELLOW
    return RatingLevel.RED


def macro_split(nutrition: NutritionProfile) -> MacroSplit:
    protein_kcal = nutrition.protein.average * KCAL_PER_G_PROTEIN
    carbs_kcal = nutrition.carbs.average * KCAL_PER_G_CARBS
    fat_kcal = nutrition.fat.average * KCAL_PER_G_FAT
    total = protein_kcal + carbs_kcal + fat_kcal
    return MacroSplit(
        protein=protein_kcal / total * 100,
        carbs=carbs_kcal / total * 100,
        fat=fat_kcal / total * 100,
    )


def worst_nutri_grade(result: RecognitionResult) -> NutriGrade | None:
    grades = [food.nutri_grade for food in result.foods if food.nutri_grade is not None]
    return max(grades) if grades else None


def generate_suggestions(
    factors: list[FactorEvaluation], result: RecognitionResult, goal: Goal
) -> list[Suggestion]:
    """Rule-driven suggestions, de-duplicated by key and capped."""
    collected: dict[tuple[SuggestionKey, str | None], Suggestion] = {}

    def add(key: SuggestionKey, item: str | None = None, tip: str | None = None) -> None:
        suggestion = Suggestion(key=key, item=item, tip=tip)
        collected.setdefault(suggestion.dedup_key, suggestion)

    for factor in factors:
        if factor.status is FactorStatus.GOOD:
            continue
        poor = factor.status is FactorStatus.POOR
        if factor.name is FactorName.CALORIES:
            if factor.note.is_high:
                add(
                    SuggestionKey.SMALLER_PORTIONS
                    if goal is Goal.LOSE_WEIGHT
                    else SuggestionKey.BALANCE_WITH_LIGHTER_MEALS
                )
            elif factor.note.is_low and goal is Goal.GAIN_MUSCLE:
                add(SuggestionKey.ADD_PROTEIN_FOR_MUSCLE)
        elif factor.name is FactorName.SODIUM:
            if poor:
                add(SuggestionKey.REDUCE_SALTY_CONDIMENTS)
                add(SuggestionKey.DRINK_WATER)
            else:
                add(SuggestionKey.WATCH_SODIUM)
        elif factor.name is FactorName.FAT:
            if poor:
                add(SuggestionKey.REMOVE_VISIBLE_FAT)
                add(SuggestionKey.CHOOSE_STEAMED_OR_GRILLED)
            else:
                add(SuggestionKey.BALANCE_WITH_LOWER_FAT)
        elif factor.name is FactorName.BALANCE and poor:
            split = macro_split(result.total_nutrition)
            if split.protein < PROTEIN_BAND[0]:
                add(SuggestionKey.ADD_PROTEIN_FOR_BALANCE)
            if split.carbs > CARBS_BAND[1]:
                add(SuggestionKey.REDUCE_REFINED_CARBS)
        elif factor.name is FactorName.GI_LEVEL and poor:
            add(SuggestionKey.SWAP_FOR_LOWER_GI)
        elif factor.name is FactorName.NUTRI_GRADE:
            if worst_nutri_grade(result) in (NutriGrade.C, NutriGrade.D):
                add(SuggestionKey.LESS_SUGAR)

    if any(food.is_hawker_food for food in result.foods):
        add(SuggestionKey.HAWKER_LESS_GRAVY)
        for food in result.foods:
            if food.improvement_tip:
                add(
                    SuggestionKey.ITEM_IMPROVEMENT_TIP,
                    item=food.display_name,
                    tip=food.improvement_tip,
                )

    goal_tip = GOAL_TIPS[goal]
    if goal_tip is not None:
        add(goal_tip)

    return list(collected.values())[:MAX_SUGGESTIONS]


def _within(value: float, band: tuple[float, float]) -> bool:
    return band[0] <= value <= band[1]


def _factor(
    name: FactorName,
    status: FactorStatus,
    score: int,
    note: FactorNote,
    language: Language,
    **values: object,
) -> FactorEvaluation:
    return FactorEvaluation(
        name=name,
        status=status,
        message=localization.factor_message(note, language, **values),
        score=score,
        note=note,
    )
