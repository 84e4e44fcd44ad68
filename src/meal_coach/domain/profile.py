"""Health profile models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from meal_coach.domain.models import ActivityLevel, Gender, Goal, TrainingType


class HealthProfile(BaseModel):
    """Body metrics and goals used to personalize ratings."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    height: float = Field(gt=0, description="Height in cm")
    weight: float = Field(gt=0, description="Weight in kg")
    age: int | None = Field(default=None, gt=0)
    gender: Gender | None = None
    goal: Goal = Goal.MAINTAIN
    activity_level: ActivityLevel = ActivityLevel.LIGHT
    protein_target: float | None = Field(default=None, gt=0)
    carb_target: float | None = Field(default=None, gt=0)
    training_type: TrainingType | None = None

    @property
    def trains(self) -> bool:
        """True when the user reported any kind of training."""
        return self.training_type not in (None, TrainingType.NONE)


def default_profile() -> HealthProfile:
    """Profile used before the user has set one up."""
    return HealthProfile(
        height=170,
        weight=65,
        age=30,
        gender=Gender.MALE,
        goal=Goal.MAINTAIN,
        activity_level=ActivityLevel.LIGHT,
        training_type=TrainingType.NONE,
    )
