"""Pydantic schemas for stored record payloads."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class RecordRow(BaseModel):
    """Fields shared by every dated record."""

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", allow_inf_nan=False
    )

    date: str = Field(pattern=DATE_PATTERN)
    user_id: str | None = Field(default=None, alias="userId")
    note: str | None = None


class FoodRow(RecordRow):
    """Stored food log payload."""

    meal_type: str = Field(alias="mealType", min_length=1)
    food_name: str = Field(alias="foodName", min_length=1)
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    sugar: float = Field(default=0.0, ge=0)
    fiber: float = Field(default=0.0, ge=0)
    sodium: float = Field(default=0.0, ge=0)


class ExerciseRow(RecordRow):
    """Stored exercise log payload."""

    exercise_type: str = Field(alias="exerciseType", min_length=1)
    duration: int = Field(ge=0)
    calories_burned: int = Field(alias="caloriesBurned", ge=0)
    intensity: Literal["Low", "Medium", "High"]


class WeightRow(RecordRow):
    """Stored weight log payload."""

    weight: float = Field(gt=0)
    timestamp: float


class HealthRow(RecordRow):
    """Stored daily health snapshot payload."""

    steps: int = Field(ge=0)
    active_energy: float = Field(alias="activeEnergy", ge=0)
    resting_energy: float = Field(alias="restingEnergy", ge=0)
    total_calories_burned: float = Field(alias="totalCaloriesBurned", ge=0)
