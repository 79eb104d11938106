"""Health sensor ingest and daily snapshot endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from fit_tracker.api.models import (  # noqa: TC001
    HealthAuthorizationRequest,
    HealthReadingsRequest,
)
from fit_tracker.domain.errors import NotFoundError

if TYPE_CHECKING:
    from fit_tracker.containers import AppContainer
    from fit_tracker.domain.health import HealthReadings

router = APIRouter(prefix="/health-data", tags=["health"])


@router.put("/authorization")
async def set_authorization(
    body: HealthAuthorizationRequest, request: Request
) -> dict[str, str]:
    """Record whether the user granted access to health data."""
    container: AppContainer = request.app.state.container
    authorization = container.health_sensors.set_authorization(body.granted)
    return {"authorization": authorization.value}


@router.delete("/authorization")
async def disconnect(request: Request) -> dict[str, str]:
    """Revoke health data access and clear the readings."""
    container: AppContainer = request.app.state.container
    container.health_sensors.disconnect()
    return {"authorization": container.health_sensors.authorization.value}


@router.post("/readings")
async def ingest_readings(
    body: HealthReadingsRequest, request: Request
) -> dict[str, object]:
    """Accept today's readings pushed by the device."""
    container: AppContainer = request.app.state.container
    readings = container.health_sensors.ingest(
        steps=body.steps,
        active_energy=body.active_energy,
        resting_energy=body.resting_energy,
    )
    return _readings_payload(readings)


@router.get("/readings")
async def current_readings(request: Request) -> dict[str, object]:
    """Return today's readings, zero when access is not granted."""
    container: AppContainer = request.app.state.container
    return _readings_payload(container.health_sensors.current_readings())


@router.post("/snapshot")
async def save_snapshot(request: Request) -> dict[str, object]:
    """Store the current readings as today's snapshot."""
    container: AppContainer = request.app.state.container
    snapshot = await container.health_logs.save_today(container.health_sensors)
    return {"snapshot": asdict(snapshot)}


@router.get("/{day}")
async def get_snapshot(day: date, request: Request) -> dict[str, object]:
    """Return the stored snapshot for a day."""
    container: AppContainer = request.app.state.container
    snapshot = await container.health_logs.fetch_day(day)
    if snapshot is None:
        raise NotFoundError(f"No health data for {day.isoformat()}")
    return {"snapshot": asdict(snapshot)}


def _readings_payload(readings: HealthReadings) -> dict[str, object]:
    return {
        "steps": readings.steps,
        "active_energy": readings.active_energy,
        "resting_energy": readings.resting_energy,
        "total_calories_burned": readings.total_calories_burned,
    }
