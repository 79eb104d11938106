"""Food, exercise and weight log endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from fit_tracker.api.models import LogEntryRequest  # noqa: TC001
from fit_tracker.services.dates import local_today

if TYPE_CHECKING:
    from fit_tracker.containers import AppContainer
    from fit_tracker.services.logs import LogManager

router = APIRouter(prefix="/logs", tags=["logs"])


def _manager(request: Request, category: str) -> LogManager:
    container: AppContainer = request.app.state.container
    manager = container.log_manager(category)
    if manager is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown log category: {category}",
        )
    return manager


@router.post("/{category}", status_code=status.HTTP_201_CREATED)
async def create_entry(
    category: str, body: LogEntryRequest, request: Request
) -> dict[str, object]:
    """Save a new entry for the given day (today by default)."""
    container: AppContainer = request.app.state.container
    manager = _manager(request, category)
    day = body.day or local_today(container.settings.zone)
    entry = await manager.save(day, body.entry)
    return {"entry": asdict(entry)}


@router.get("/{category}")
async def list_entries(
    category: str, request: Request, day: date | None = None
) -> dict[str, object]:
    """Return entries logged on a day (today by default)."""
    container: AppContainer = request.app.state.container
    manager = _manager(request, category)
    resolved = day or local_today(container.settings.zone)
    entries = await manager.fetch(resolved)
    return {"date": resolved.isoformat(), "entries": [asdict(e) for e in entries]}


@router.delete("/{category}/{record_id}")
async def delete_entry(
    category: str, record_id: str, request: Request
) -> dict[str, str]:
    """Delete an entry by id."""
    manager = _manager(request, category)
    await manager.delete(record_id)
    return {"status": "deleted"}
