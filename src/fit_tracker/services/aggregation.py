"""Pure aggregation over logged entries."""

from collections.abc import Iterable

from fit_tracker.domain.logs import ExerciseEntry, FoodEntry, WeightEntry
from fit_tracker.domain.stats import (
    ExerciseTotals,
    NutritionTotals,
    WeightPoint,
    WeightProgress,
)


def aggregate_nutrition(entries: Iterable[FoodEntry]) -> NutritionTotals:
    """Sum nutrients field-wise."""
    total = NutritionTotals()
    for entry in entries:
        total = NutritionTotals(
            calories=total.calories + entry.calories,
            protein=total.protein + entry.protein,
            carbs=total.carbs + entry.carbs,
            fat=total.fat + entry.fat,
            sugar=total.sugar + entry.sugar,
            fiber=total.fiber + entry.fiber,
            sodium=total.sodium + entry.sodium,
        )
    return total


def aggregate_exercise(entries: Iterable[ExerciseEntry]) -> ExerciseTotals:
    """Sum exercise minutes and calories burned."""
    total = ExerciseTotals()
    for entry in entries:
        total = ExerciseTotals(
            total_minutes=total.total_minutes + entry.duration,
            total_calories_burned=total.total_calories_burned + entry.calories_burned,
        )
    return total


def is_empty_day(totals: NutritionTotals) -> bool:
    """Return True when nothing with calories or macros was logged."""
    return (
        totals.calories == 0
        and totals.protein == 0
        and totals.carbs == 0
        and totals.fat == 0
    )


def weight_progress(entries: Iterable[WeightEntry]) -> WeightProgress:
    """Compute first/last change and mean over weight entries sorted by date."""
    points = [
        WeightPoint(date=entry.date, weight=entry.weight)
        for entry in sorted(entries, key=lambda entry: entry.date)
    ]
    if not points:
        return WeightProgress(
            points=[], first=None, last=None, change=None, average=None
        )
    first = points[0].weight
    last = points[-1].weight
    return WeightProgress(
        points=points,
        first=first,
        last=last,
        change=last - first,
        average=sum(point.weight for point in points) / len(points),
    )
