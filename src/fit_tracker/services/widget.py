"""Home-screen widget snapshot computation."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from fit_tracker.domain.errors import TrackerError
from fit_tracker.domain.logs import FoodEntry
from fit_tracker.domain.profile import MacroGoals
from fit_tracker.domain.widget import (
    EMPTY_DAY_MESSAGE,
    ERROR_OVERLAY_MESSAGE,
    WidgetSnapshot,
    WidgetState,
)
from fit_tracker.services.aggregation import aggregate_nutrition, is_empty_day
from fit_tracker.services.identity import IdentityProvider
from fit_tracker.services.logs import LogManager, RefreshSignal
from fit_tracker.services.profile import ProfileService
from fit_tracker.services.shared_state import (
    WIDGET_REFRESH_REQUESTED_KEY,
    WIDGET_SNAPSHOT_KEY,
    SharedStore,
)

DEFAULT_REFRESH_INTERVAL = timedelta(seconds=300)

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SharedStoreRefreshSignal(RefreshSignal):
    """Leave a refresh hint for the widget in the shared store."""

    shared_store: SharedStore
    clock: Callable[[], datetime] = _utc_now

    async def request_refresh(self) -> None:
        await asyncio.to_thread(
            self.shared_store.set,
            WIDGET_REFRESH_REQUESTED_KEY,
            self.clock().isoformat(),
        )


@dataclass
class WidgetSnapshotProvider:
    """Recompute today's macro snapshot for the widget process.

    Each ``refresh`` moves through FETCHING to RENDERED or ERROR. Failures are
    rendered as the error overlay entry and never raised.
    """

    identity: IdentityProvider
    food: LogManager[FoodEntry]
    profile: ProfileService
    shared_store: SharedStore
    timezone: ZoneInfo
    refresh_interval: timedelta = DEFAULT_REFRESH_INTERVAL
    clock: Callable[[], datetime] = _utc_now
    state: WidgetState = field(default=WidgetState.IDLE, init=False)
    snapshot: WidgetSnapshot | None = field(default=None, init=False)
    last_error: str | None = field(default=None, init=False)

    async def refresh(self) -> WidgetSnapshot:
        """Fetch today's totals and goals, then render and publish a snapshot."""
        self.state = WidgetState.FETCHING
        now = self.clock()
        next_refresh_at = now + self.refresh_interval
        try:
            await self.identity.ensure_identity()
            entries, goals = await asyncio.gather(
                self.food.fetch(now), self.profile.get_macro_goals()
            )
        except TrackerError as exc:
            _logger.warning("Widget refresh failed: %s", exc)
            self.last_error = str(exc)
            snapshot = _error_snapshot(now, next_refresh_at)
            self.state = WidgetState.ERROR
        else:
            self.last_error = None
            snapshot = _render(now, next_refresh_at, entries, goals)
            self.state = WidgetState.RENDERED
        self.snapshot = snapshot
        await self._publish(snapshot)
        return snapshot

    async def _publish(self, snapshot: WidgetSnapshot) -> None:
        try:
            await asyncio.to_thread(
                self.shared_store.set, WIDGET_SNAPSHOT_KEY, snapshot.to_dict()
            )
        except OSError:
            _logger.exception("Failed to write widget snapshot")


def _render(
    now: datetime,
    next_refresh_at: datetime,
    entries: list[FoodEntry],
    goals: MacroGoals,
) -> WidgetSnapshot:
    totals = aggregate_nutrition(entries)
    empty = is_empty_day(totals)
    return WidgetSnapshot(
        rendered_at=now,
        next_refresh_at=next_refresh_at,
        calories=totals.calories,
        protein=totals.protein,
        carbs=totals.carbs,
        fat=totals.fat,
        calorie_goal=goals.calories,
        protein_goal=goals.protein,
        carbs_goal=goals.carbs,
        fat_goal=goals.fat,
        is_empty_day=empty,
        has_error=False,
        message=EMPTY_DAY_MESSAGE if empty else None,
    )


def _error_snapshot(now: datetime, next_refresh_at: datetime) -> WidgetSnapshot:
    goals = MacroGoals()
    return WidgetSnapshot(
        rendered_at=now,
        next_refresh_at=next_refresh_at,
        calories=0,
        protein=0,
        carbs=0,
        fat=0,
        calorie_goal=goals.calories,
        protein_goal=goals.protein,
        carbs_goal=goals.carbs,
        fat_goal=goals.fat,
        is_empty_day=False,
        has_error=True,
        message=ERROR_OVERLAY_MESSAGE,
    )
