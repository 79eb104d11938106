"""Dependency container wiring for the app and widget processes."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import AsyncClient

from fit_tracker.adapters.open_food_facts_client import HttpxFoodFactsClient
from fit_tracker.adapters.shared_file_store import JsonFileSharedStore
from fit_tracker.adapters.supabase_auth_client import SupabaseAnonymousAuthClient
from fit_tracker.adapters.supabase_record_store import SupabaseRecordStore
from fit_tracker.config import Settings
from fit_tracker.domain.logs import ExerciseEntry, FoodEntry, WeightEntry
from fit_tracker.services.cache import InMemoryCache
from fit_tracker.services.health import HealthSensorService
from fit_tracker.services.identity import IdentityService, SharedIdentityProvider
from fit_tracker.services.logs import (
    EXERCISE_SCHEMA,
    FOOD_SCHEMA,
    HEALTH_SCHEMA,
    WEIGHT_SCHEMA,
    HealthDataManager,
    LogManager,
)
from fit_tracker.services.nutrition import NutritionService
from fit_tracker.services.profile import ProfileService
from fit_tracker.services.shared_state import SharedStore
from fit_tracker.services.stats import StatsService
from fit_tracker.services.widget import (
    SharedStoreRefreshSignal,
    WidgetSnapshotProvider,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    shared_store: SharedStore
    identity_service: IdentityService
    food_logs: LogManager[FoodEntry]
    exercise_logs: LogManager[ExerciseEntry]
    weight_logs: LogManager[WeightEntry]
    health_logs: HealthDataManager
    health_sensors: HealthSensorService
    profile_service: ProfileService
    stats_service: StatsService
    nutrition_service: NutritionService
    close_resources: Callable[[], Awaitable[None]]

    def log_manager(self, category: str) -> LogManager | None:
        """Return the manager for a loggable category path segment."""
        return {
            "food": self.food_logs,
            "exercise": self.exercise_logs,
            "weight": self.weight_logs,
        }.get(category)


@dataclass
class WidgetContainer:
    """Dependencies of the widget process."""

    settings: Settings
    shared_store: SharedStore
    snapshot_provider: WidgetSnapshotProvider


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    timezone = resolved_settings.zone
    supabase_client = AsyncClient(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )
    store = SupabaseRecordStore(
        supabase_client, table_name=resolved_settings.records_table
    )
    shared_store = JsonFileSharedStore(resolved_settings.shared_store_dir)
    identity_service = IdentityService(
        auth_client=SupabaseAnonymousAuthClient(supabase_client),
        shared_store=shared_store,
    )
    refresh_signal = SharedStoreRefreshSignal(shared_store)
    food_logs = LogManager(
        FOOD_SCHEMA, store, identity_service, timezone, refresh_signal
    )
    exercise_logs = LogManager(EXERCISE_SCHEMA, store, identity_service, timezone)
    weight_logs = LogManager(WEIGHT_SCHEMA, store, identity_service, timezone)
    health_logs = HealthDataManager(HEALTH_SCHEMA, store, identity_service, timezone)
    profile_service = ProfileService(store, identity_service, refresh_signal)
    stats_service = StatsService(
        food=food_logs,
        exercise=exercise_logs,
        weight=weight_logs,
        health=health_logs,
        profile=profile_service,
        timezone=timezone,
    )
    food_facts_client = HttpxFoodFactsClient.create(resolved_settings.off_base_url)
    nutrition_service = NutritionService(
        client=food_facts_client,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.lookup_cache_ttl_seconds,
    )

    async def close_resources() -> None:
        await food_facts_client.close()

    return AppContainer(
        settings=resolved_settings,
        shared_store=shared_store,
        identity_service=identity_service,
        food_logs=food_logs,
        exercise_logs=exercise_logs,
        weight_logs=weight_logs,
        health_logs=health_logs,
        health_sensors=HealthSensorService(),
        profile_service=profile_service,
        stats_service=stats_service,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )


def build_widget_container(settings: Settings | None = None) -> WidgetContainer:
    """Create the widget process container; it never creates an identity."""
    resolved_settings = settings or Settings()
    timezone = resolved_settings.zone
    supabase_client = AsyncClient(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )
    store = SupabaseRecordStore(
        supabase_client, table_name=resolved_settings.records_table
    )
    shared_store = JsonFileSharedStore(resolved_settings.shared_store_dir)
    identity = SharedIdentityProvider(shared_store)
    snapshot_provider = WidgetSnapshotProvider(
        identity=identity,
        food=LogManager(FOOD_SCHEMA, store, identity, timezone),
        profile=ProfileService(store, identity),
        shared_store=shared_store,
        timezone=timezone,
        refresh_interval=timedelta(seconds=resolved_settings.widget_refresh_seconds),
    )
    return WidgetContainer(
        settings=resolved_settings,
        shared_store=shared_store,
        snapshot_provider=snapshot_provider,
    )
