"""Profile and goals endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from fit_tracker.api.models import ProfileRequest  # noqa: TC001
from fit_tracker.services.profile import profile_to_dict

if TYPE_CHECKING:
    from fit_tracker.containers import AppContainer

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(request: Request) -> dict[str, object]:
    """Return the stored profile, defaults when none was saved."""
    container: AppContainer = request.app.state.container
    profile = await container.profile_service.refresh()
    return {"profile": profile_to_dict(profile)}


@router.put("")
async def replace_profile(body: ProfileRequest, request: Request) -> dict[str, object]:
    """Replace the profile and its macro goals."""
    container: AppContainer = request.app.state.container
    profile = body.to_profile()
    await container.profile_service.save_profile(profile)
    return {"profile": profile_to_dict(profile)}
