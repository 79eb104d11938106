"""Barcode scan lookup endpoint."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

if TYPE_CHECKING:
    from fit_tracker.containers import AppContainer

router = APIRouter(prefix="/scan", tags=["scan"])


@router.get("/{barcode}")
async def scan_barcode(barcode: str, request: Request) -> dict[str, object]:
    """Look up per-100g nutrients for a scanned barcode."""
    container: AppContainer = request.app.state.container
    food = await container.nutrition_service.lookup_barcode(barcode)
    return {"found": not food.is_empty_result, "food": asdict(food)}
