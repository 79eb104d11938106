"""Domain models for derived statistics."""

from dataclasses import dataclass

from fit_tracker.domain.logs import ExerciseEntry, HealthSnapshot
from fit_tracker.domain.profile import MacroGoals


@dataclass(frozen=True)
class NutritionTotals:
    """Summed nutrients for a set of food entries."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    sugar: float = 0.0
    fiber: float = 0.0
    sodium: float = 0.0


@dataclass(frozen=True)
class ExerciseTotals:
    """Summed duration and energy for a set of exercise entries."""

    total_minutes: int = 0
    total_calories_burned: int = 0


@dataclass(frozen=True)
class WeightPoint:
    """Weight reading plotted for one day."""

    date: str
    weight: float


@dataclass(frozen=True)
class WeightProgress:
    """Weight trend over a date range."""

    points: list[WeightPoint]
    first: float | None
    last: float | None
    change: float | None
    average: float | None


@dataclass(frozen=True)
class DailySummary:
    """Dashboard view of one calendar date."""

    date: str
    nutrition: NutritionTotals
    exercise: ExerciseTotals
    health: HealthSnapshot | None
    goals: MacroGoals
    calories_remaining: float


@dataclass(frozen=True)
class ExerciseHistory:
    """Exercise entries and totals over a date range."""

    start: str
    end: str
    entries: list[ExerciseEntry]
    totals: ExerciseTotals
