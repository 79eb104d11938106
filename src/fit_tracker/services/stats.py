"""Statistics service for dashboards and progress charts."""

import asyncio
from dataclasses import dataclass
from datetime import date
from zoneinfo import ZoneInfo

from fit_tracker.domain.logs import ExerciseEntry, FoodEntry, WeightEntry
from fit_tracker.domain.stats import DailySummary, ExerciseHistory, WeightProgress
from fit_tracker.services.aggregation import (
    aggregate_exercise,
    aggregate_nutrition,
    weight_progress,
)
from fit_tracker.services.dates import (
    TimeFrame,
    days_between,
    format_day,
    local_today,
    timeframe_start,
)
from fit_tracker.services.logs import HealthDataManager, LogManager
from fit_tracker.services.profile import ProfileService


@dataclass
class StatsService:
    """Service computing daily and ranged statistics in the local time zone."""

    food: LogManager[FoodEntry]
    exercise: LogManager[ExerciseEntry]
    weight: LogManager[WeightEntry]
    health: HealthDataManager
    profile: ProfileService
    timezone: ZoneInfo

    async def get_day(self, day: date | None = None) -> DailySummary:
        """Return the dashboard summary for a day (today by default)."""
        resolved = day or local_today(self.timezone)
        food, exercise, health, goals = await asyncio.gather(
            self.food.fetch(resolved),
            self.exercise.fetch(resolved),
            self.health.fetch_day(resolved),
            self.profile.get_macro_goals(),
        )
        nutrition = aggregate_nutrition(food)
        return DailySummary(
            date=format_day(resolved, self.timezone),
            nutrition=nutrition,
            exercise=aggregate_exercise(exercise),
            health=health,
            goals=goals,
            calories_remaining=goals.calories - nutrition.calories,
        )

    async def get_weight_progress(
        self, timeframe: TimeFrame, end: date | None = None
    ) -> WeightProgress:
        """Return the weight trend, one query per day in the window."""
        days = self._window(timeframe, end)
        per_day = await asyncio.gather(*(self.weight.fetch(day) for day in days))
        latest = [entries[0] for entries in per_day if entries]
        return weight_progress(latest)

    async def get_exercise_history(
        self, timeframe: TimeFrame, end: date | None = None
    ) -> ExerciseHistory:
        """Return exercise entries and totals, one query per day in the window."""
        days = self._window(timeframe, end)
        per_day = await asyncio.gather(*(self.exercise.fetch(day) for day in days))
        entries = [entry for day_entries in per_day for entry in day_entries]
        return ExerciseHistory(
            start=format_day(days[0], self.timezone),
            end=format_day(days[-1], self.timezone),
            entries=entries,
            totals=aggregate_exercise(entries),
        )

    def _window(self, timeframe: TimeFrame, end: date | None) -> list[date]:
        resolved_end = end or local_today(self.timezone)
        return days_between(timeframe_start(timeframe, resolved_end), resolved_end)
