"""Shared test fixtures."""

from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from fit_tracker.adapters.open_food_facts_client import FoodFactsClient
from fit_tracker.config import Settings
from fit_tracker.containers import AppContainer
from fit_tracker.domain.errors import TrackerError
from fit_tracker.domain.logs import LogCategory, StoredRecord
from fit_tracker.services.cache import InMemoryCache
from fit_tracker.services.health import HealthSensorService
from fit_tracker.services.identity import AnonymousAuthClient, IdentityService
from fit_tracker.services.keys import RecordKeyGenerator
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
from fit_tracker.services.records import RecordStore
from fit_tracker.services.shared_state import SharedStore
from fit_tracker.services.stats import StatsService

UTC_ZONE = ZoneInfo("UTC")


@dataclass
class InMemoryRecordStore(RecordStore):
    """In-memory record store for tests."""

    records: dict[tuple[str, str, str], dict[str, object]] = field(
        default_factory=dict
    )
    key_generator: RecordKeyGenerator = field(default_factory=RecordKeyGenerator)
    error: TrackerError | None = None
    queries: list[tuple[str, str, str]] = field(default_factory=list)

    def add_raw(
        self, user_id: str, category: LogCategory, key: str, data: dict[str, object]
    ) -> None:
        self.records[(user_id, category.value, key)] = data

    async def write(
        self,
        user_id: str,
        category: LogCategory,
        key: str | None,
        data: dict[str, object],
    ) -> str:
        self._raise_if_failing()
        resolved_key = key or self.key_generator.next_key()
        self.records[(user_id, category.value, resolved_key)] = dict(data)
        return resolved_key

    async def read(
        self, user_id: str, category: LogCategory, key: str
    ) -> StoredRecord | None:
        self._raise_if_failing()
        data = self.records.get((user_id, category.value, key))
        if data is None:
            return None
        return StoredRecord(key=key, data=dict(data))

    async def query_by_date(
        self, user_id: str, category: LogCategory, date: str
    ) -> list[StoredRecord]:
        self._raise_if_failing()
        self.queries.append((user_id, category.value, date))
        return [
            StoredRecord(key=key, data=dict(data))
            for (owner, stored_category, key), data in sorted(self.records.items())
            if owner == user_id
            and stored_category == category.value
            and data.get("date") == date
        ]

    async def delete(self, user_id: str, category: LogCategory, key: str) -> None:
        self._raise_if_failing()
        self.records.pop((user_id, category.value, key), None)

    def _raise_if_failing(self) -> None:
        if self.error is not None:
            raise self.error


@dataclass
class InMemorySharedStore(SharedStore):
    """Dictionary-backed shared store for tests."""

    values: dict[str, object] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        return self.values.get(key)

    def set(self, key: str, value: object) -> None:
        self.values[key] = value


@dataclass
class FakeAuthClient(AnonymousAuthClient):
    """Fake anonymous auth issuing sequential user ids."""

    session_id: str | None = None
    sign_in_calls: int = 0

    async def session_user_id(self) -> str | None:
        return self.session_id

    async def sign_in_anonymously(self) -> str:
        self.sign_in_calls += 1
        return f"anon-user-{self.sign_in_calls}"


@dataclass
class FakeFoodFactsClient(FoodFactsClient):
    """Fake Open Food Facts client with in-memory products."""

    products: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "737628064502": {
                "product_name": "Thai Peanut Noodles",
                "nutriments": {
                    "energy-kcal_100g": 385,
                    "proteins_100g": 9.6,
                    "carbohydrates_100g": 71.2,
                    "fat_100g": 7.7,
                    "sugars_100g": 13.5,
                    "fiber_100g": 1.9,
                    "sodium_100g": 0.72,
                },
            }
        }
    )
    calls: list[str] = field(default_factory=list)
    error: Exception | None = None

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        self.calls.append(barcode)
        if self.error is not None:
            raise self.error
        return self.products.get(barcode)


@dataclass
class RecordingRefreshSignal:
    """Refresh signal that counts hints and can be told to fail."""

    requests: int = 0
    fail: bool = False

    async def request_refresh(self) -> None:
        if self.fail:
            raise OSError("shared store unavailable")
        self.requests += 1


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_key="anon-key",
        shared_store_dir=tmp_path / "shared",
        timezone="UTC",
    )


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def shared_store() -> InMemorySharedStore:
    return InMemorySharedStore()


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def identity_service(
    auth_client: FakeAuthClient, shared_store: InMemorySharedStore
) -> IdentityService:
    return IdentityService(auth_client=auth_client, shared_store=shared_store)


@pytest.fixture
def refresh_signal() -> RecordingRefreshSignal:
    return RecordingRefreshSignal()


@pytest.fixture
def food_logs(
    record_store: InMemoryRecordStore,
    identity_service: IdentityService,
    refresh_signal: RecordingRefreshSignal,
) -> LogManager:
    return LogManager(
        FOOD_SCHEMA, record_store, identity_service, UTC_ZONE, refresh_signal
    )


@pytest.fixture
def food_facts_client() -> FakeFoodFactsClient:
    return FakeFoodFactsClient()


@pytest.fixture
def container(
    settings: Settings,
    record_store: InMemoryRecordStore,
    shared_store: InMemorySharedStore,
    identity_service: IdentityService,
    refresh_signal: RecordingRefreshSignal,
    food_logs: LogManager,
    food_facts_client: FakeFoodFactsClient,
) -> AppContainer:
    exercise_logs = LogManager(
        EXERCISE_SCHEMA, record_store, identity_service, UTC_ZONE
    )
    weight_logs = LogManager(WEIGHT_SCHEMA, record_store, identity_service, UTC_ZONE)
    health_logs = HealthDataManager(
        HEALTH_SCHEMA, record_store, identity_service, UTC_ZONE
    )
    profile_service = ProfileService(record_store, identity_service, refresh_signal)
    stats_service = StatsService(
        food=food_logs,
        exercise=exercise_logs,
        weight=weight_logs,
        health=health_logs,
        profile=profile_service,
        timezone=UTC_ZONE,
    )
    nutrition_service = NutritionService(
        client=food_facts_client, cache=InMemoryCache()
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
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
