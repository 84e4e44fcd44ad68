"""Models for validated food recognition results."""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from meal_coach.domain.models import GILevel, MealContext, NutriGrade

NUTRIENTS = ("calories", "protein", "carbs", "fat", "sodium")


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class NutritionRange(_CamelModel):
    """Estimated range for one nutrient (kcal, g or mg)."""

    min: float = Field(ge=0)
    max: float = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "NutritionRange":
        if self.min >= self.max:
            raise ValueError("min must be less than max")
        return self

    @property
    def average(self) -> float:
        """Midpoint of the range, used for scoring."""
        return (self.min + self.max) / 2


class NutritionProfile(_CamelModel):
    """Calories, macros and sodium as ranges."""

    calories: NutritionRange
    protein: NutritionRange
    carbs: NutritionRange
    fat: NutritionRange
    sodium: NutritionRange


class FoodItem(_CamelModel):
    """Single recognized food item."""

    name: str = Field(min_length=1)
    name_local: str
    confidence: float = Field(ge=0, le=100)
    portion: str = ""
    nutrition: NutritionProfile
    nutri_grade: NutriGrade | None = None
    gi_level: GILevel | None = None
    is_hawker_food: bool = False
    improvement_tip: str | None = None
    modifiers: list[str] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.name_local or self.name


class RecognitionResult(_CamelModel):
    """Structured nutrition estimate for one meal."""

    foods: list[FoodItem] = Field(min_length=1)
    total_nutrition: NutritionProfile
    meal_context: MealContext

    def low_confidence_items(self, threshold: float = 60) -> list[FoodItem]:
        """Return items the model was unsure about."""
        return [food for food in self.foods if food.confidence < threshold]

    def to_json(self) -> str:
        """Serialize using the camelCase wire names."""
        return self.model_dump_json(by_alias=True)
