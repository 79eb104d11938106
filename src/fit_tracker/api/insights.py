"""Dashboard summary and progress endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from fit_tracker.services.dates import TimeFrame

if TYPE_CHECKING:
    from fit_tracker.containers import AppContainer

router = APIRouter(tags=["insights"])


@router.get("/summary/{day}")
async def daily_summary(day: date, request: Request) -> dict[str, object]:
    """Return nutrition, exercise and health totals for a day."""
    container: AppContainer = request.app.state.container
    summary = await container.stats_service.get_day(day)
    return asdict(summary)


@router.get("/progress/weight")
async def weight_progress(
    request: Request, timeframe: TimeFrame = TimeFrame.WEEK
) -> dict[str, object]:
    """Return the weight trend over a time frame ending today."""
    container: AppContainer = request.app.state.container
    progress = await container.stats_service.get_weight_progress(timeframe)
    return {"timeframe": timeframe.value, **asdict(progress)}


@router.get("/progress/exercise")
async def exercise_progress(
    request: Request, timeframe: TimeFrame = TimeFrame.WEEK
) -> dict[str, object]:
    """Return exercise entries and totals over a time frame ending today."""
    container: AppContainer = request.app.state.container
    history = await container.stats_service.get_exercise_history(timeframe)
    return {"timeframe": timeframe.value, **asdict(history)}
