"""Daily nutritional targets derived from a health profile."""

from dataclasses import dataclass

from meal_coach.domain.models import (
    ActivityLevel,
    Gender,
    Goal,
    TrainingType,
    require_exhaustive,
)
from meal_coach.domain.profile import HealthProfile
from meal_coach.domain.rating import DailyTarget

DEFAULT_AGE = 30
SODIUM_REFERENCE_MG = 2000
MIN_FAT_G = 30
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

ACTIVITY_FACTORS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
}

GOAL_CALORIE_ADJUSTMENTS: dict[Goal, int] = {
    Goal.LOSE_WEIGHT: -500,
    Goal.GAIN_MUSCLE: 300,
    Goal.CONTROL_SUGAR: 0,
    Goal.MAINTAIN: 0,
}

PROTEIN_PER_KG: dict[Goal, float] = {
    Goal.LOSE_WEIGHT: 1.6,
    Goal.GAIN_MUSCLE: 2.0,
    Goal.CONTROL_SUGAR: 1.2,
    Goal.MAINTAIN: 1.0,
}
STRENGTH_PROTEIN_PER_KG = 2.2
TRAINING_MAINTAIN_PROTEIN_PER_KG = 1.4

CARB_CALORIE_SHARE: dict[Goal, float] = {
    Goal.GAIN_MUSCLE: 0.50,
    Goal.LOSE_WEIGHT: 0.35,
    Goal.CONTROL_SUGAR: 0.30,
    Goal.MAINTAIN: 0.45,
}

require_exhaustive(ACTIVITY_FACTORS, ActivityLevel, "ACTIVITY_FACTORS")
require_exhaustive(GOAL_CALORIE_ADJUSTMENTS, Goal, "GOAL_CALORIE_ADJUSTMENTS")
require_exhaustive(PROTEIN_PER_KG, Goal, "PROTEIN_PER_KG")
require_exhaustive(CARB_CALORIE_SHARE, Goal, "CARB_CALORIE_SHARE")


@dataclass(frozen=True)
class DailyTargetCalculator:
    """Pure calculator; the same profile always yields the same target."""

    def compute(self, profile: HealthProfile) -> DailyTarget:
        """Return daily calorie, macro and sodium targets."""
        calories = daily_calories(profile)
        protein = (
            profile.protein_target
            if profile.protein_target is not None
            else profile.weight * protein_per_kg(profile)
        )
        carbs = (
            profile.carb_target
            if profile.carb_target is not None
            else calories * CARB_CALORIE_SHARE[profile.goal] / KCAL_PER_G_CARBS
        )
        remaining = calories - protein * KCAL_PER_G_PROTEIN - carbs * KCAL_PER_G_CARBS
        fat = max(remaining / KCAL_PER_G_FAT, MIN_FAT_G)
        return DailyTarget(
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
            sodium=SODIUM_REFERENCE_MG,
        )


def daily_calories(profile: HealthProfile) -> int:
    """Mifflin-St Jeor BMR scaled by activity and shifted by goal."""
    age = profile.age if profile.age is not None else DEFAULT_AGE
    gender_offset = -161 if profile.gender is Gender.FEMALE else 5
    bmr = 10 * profile.weight + 6.25 * profile.height - 5 * age + gender_offset
    tdee = bmr * ACTIVITY_FACTORS[profile.activity_level]
    return round(tdee + GOAL_CALORIE_ADJUSTMENTS[profile.goal])


def protein_per_kg(profile: HealthProfile) -> float:
    """Grams of protein per kg of body weight for the profile's goal."""
    if profile.goal is Goal.GAIN_MUSCLE and profile.training_type is TrainingType.STRENGTH:
        return STRENGTH_PROTEIN_PER_KG
    if profile.goal is Goal.MAINTAIN and profile.trains:
        return TRAINING_MAINTAIN_PROTEIN_PER_KG
    return PROTEIN_PER_KG[profile.goal]
