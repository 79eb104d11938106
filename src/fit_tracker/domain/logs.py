"""Domain models for logged records."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class LogCategory(StrEnum):
    """Top-level record categories under a user's branch."""

    FOOD = "foodLogs"
    EXERCISE = "exerciseLogs"
    WEIGHT = "weightLogs"
    HEALTH = "healthData"
    PROFILE = "profile"


@dataclass(frozen=True)
class StoredRecord:
    """Raw record as returned by the record store."""

    key: str
    data: dict[str, object]


@dataclass(frozen=True)
class FoodEntry:
    """A logged food item."""

    id: str
    date: str
    meal_type: str
    food_name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    sugar: float
    fiber: float
    sodium: float
    note: str | None = None


@dataclass(frozen=True)
class ExerciseEntry:
    """A logged exercise session."""

    id: str
    date: str
    exercise_type: str
    duration: int
    calories_burned: int
    intensity: str
    note: str | None = None


@dataclass(frozen=True)
class WeightEntry:
    """A logged body weight measurement."""

    id: str
    date: str
    timestamp: datetime
    weight: float
    note: str | None = None


@dataclass(frozen=True)
class HealthSnapshot:
    """Step and energy counters captured for one day."""

    id: str
    date: str
    steps: int
    active_energy: float
    resting_energy: float
    total_calories_burned: float
    note: str | None = None
