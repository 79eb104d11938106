"""Per-category log managers over the record store."""

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any, Generic, Protocol, TypeVar
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from fit_tracker.domain.errors import EntryValidationError, MalformedRecordError
from fit_tracker.domain.logs import (
    ExerciseEntry,
    FoodEntry,
    HealthSnapshot,
    LogCategory,
    StoredRecord,
    WeightEntry,
)
from fit_tracker.domain.schemas import (
    ExerciseRow,
    FoodRow,
    HealthRow,
    RecordRow,
    WeightRow,
)
from fit_tracker.services.dates import format_day, local_today
from fit_tracker.services.health import HealthSensorService
from fit_tracker.services.identity import IdentityProvider
from fit_tracker.services.records import RecordStore

T = TypeVar("T")

_logger = logging.getLogger(__name__)


class RefreshSignal(Protocol):
    """Best-effort hint that widget data changed."""

    async def request_refresh(self) -> None:
        """Record that the widget should re-read its data."""


@dataclass(frozen=True)
class LogSchema(Generic[T]):
    """Describes how one category is stored and mapped to entries."""

    category: LogCategory
    row_model: type[RecordRow]
    to_entry: Callable[[str, Any], T]
    keyed_by_date: bool = False
    signals_widget: bool = False
    generated_fields: Callable[[], dict[str, object]] | None = None
    sort_key: Callable[[T], object] | None = None
    sort_descending: bool = False


@dataclass
class LogManager(Generic[T]):
    """Save, fetch and delete records of one category for the current user.

    ``items`` and ``selected_date`` are the session cache published to the UI.
    """

    schema: LogSchema[T]
    store: RecordStore
    identity: IdentityProvider
    timezone: ZoneInfo
    refresh_signal: RefreshSignal | None = None
    items: list[T] = field(default_factory=list, init=False)
    selected_date: str | None = field(default=None, init=False)
    _generation: int = field(default=0, init=False)

    @property
    def category(self) -> LogCategory:
        """Return the managed category."""
        return self.schema.category

    async def save(self, day: date | datetime, payload: Mapping[str, object]) -> T:
        """Validate and persist a new record for ``day``."""
        user_id = await self.identity.ensure_identity()
        date_string = format_day(day, self.timezone)
        values = dict(payload)
        if self.schema.generated_fields:
            values.update(self.schema.generated_fields())
        values["date"] = date_string
        values["userId"] = user_id
        row = _validate_entry(self.schema.row_model, values)
        key = date_string if self.schema.keyed_by_date else None
        record_id = await self.store.write(
            user_id,
            self.schema.category,
            key,
            row.model_dump(by_alias=True, exclude_none=True),
        )
        entry = self.schema.to_entry(record_id, row)
        if self.selected_date == date_string:
            self.items = self._sorted(
                [item for item in self.items if _entry_id(item) != record_id] + [entry]
            )
        await self._signal_widget()
        return entry

    async def fetch(self, day: date | datetime) -> list[T]:
        """Return valid entries stored for ``day``; malformed rows are skipped."""
        user_id = await self.identity.ensure_identity()
        date_string = format_day(day, self.timezone)
        records = await self.store.query_by_date(
            user_id, self.schema.category, date_string
        )
        return self._sorted(self._parse_records(records))

    async def delete(self, record_id: str) -> None:
        """Delete a record by id."""
        user_id = await self.identity.ensure_identity()
        await self.store.delete(user_id, self.schema.category, record_id)
        self.items = [item for item in self.items if _entry_id(item) != record_id]
        await self._signal_widget()

    async def select_date(self, day: date | datetime) -> list[T] | None:
        """Fetch ``day`` and publish it to the session cache.

        Returns None when a later selection started before this one finished;
        the superseded result is discarded instead of overwriting newer state.
        """
        self._generation += 1
        generation = self._generation
        entries = await self.fetch(day)
        if generation != self._generation:
            _logger.debug(
                "Discarding stale %s fetch for %s", self.schema.category.value, day
            )
            return None
        self.selected_date = format_day(day, self.timezone)
        self.items = entries
        return entries

    def _parse_records(self, records: list[StoredRecord]) -> list[T]:
        entries: list[T] = []
        for record in records:
            try:
                row = self.schema.row_model.model_validate(record.data)
            except ValidationError as exc:
                error = MalformedRecordError(record.key, _first_error(exc)[1])
                _logger.warning("Skipping %s: %s", self.schema.category.value, error)
                continue
            entries.append(self.schema.to_entry(record.key, row))
        return entries

    def _sorted(self, entries: list[T]) -> list[T]:
        if self.schema.sort_key is None:
            return entries
        return sorted(
            entries, key=self.schema.sort_key, reverse=self.schema.sort_descending
        )

    async def _signal_widget(self) -> None:
        if not self.schema.signals_widget or self.refresh_signal is None:
            return
        try:
            await self.refresh_signal.request_refresh()
        except Exception:
            _logger.warning("Failed to send widget refresh hint", exc_info=True)


class HealthDataManager(LogManager[HealthSnapshot]):
    """Log manager for daily health snapshots, stored one per date."""

    async def fetch_day(self, day: date | datetime) -> HealthSnapshot | None:
        """Return the snapshot stored for ``day``, if any."""
        user_id = await self.identity.ensure_identity()
        date_string = format_day(day, self.timezone)
        record = await self.store.read(user_id, self.schema.category, date_string)
        if record is None:
            return None
        entries = self._parse_records([record])
        return entries[0] if entries else None

    async def save_today(self, sensors: HealthSensorService) -> HealthSnapshot:
        """Store the sensors' current readings as today's snapshot."""
        return await self.save(local_today(self.timezone), sensors.snapshot_payload())


def _validate_entry(model: type[RecordRow], values: dict[str, object]) -> RecordRow:
    try:
        return model.model_validate(values)
    except ValidationError as exc:
        field_name, message = _first_error(exc)
        raise EntryValidationError(field_name, message) from exc


def _first_error(exc: ValidationError) -> tuple[str, str]:
    errors = exc.errors()
    if not errors:
        return "payload", str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "payload"
    return location, str(first.get("msg", "invalid value"))


def _entry_id(entry: object) -> str | None:
    return getattr(entry, "id", None)


def _food_entry(key: str, row: FoodRow) -> FoodEntry:
    return FoodEntry(
        id=key,
        date=row.date,
        meal_type=row.meal_type,
        food_name=row.food_name,
        calories=row.calories,
        protein=row.protein,
        carbs=row.carbs,
        fat=row.fat,
        sugar=row.sugar,
        fiber=row.fiber,
        sodium=row.sodium,
        note=row.note,
    )


def _exercise_entry(key: str, row: ExerciseRow) -> ExerciseEntry:
    return ExerciseEntry(
        id=key,
        date=row.date,
        exercise_type=row.exercise_type,
        duration=row.duration,
        calories_burned=row.calories_burned,
        intensity=row.intensity,
        note=row.note,
    )


def _weight_entry(key: str, row: WeightRow) -> WeightEntry:
    return WeightEntry(
        id=key,
        date=row.date,
        timestamp=datetime.fromtimestamp(row.timestamp, tz=UTC),
        weight=row.weight,
        note=row.note,
    )


def _health_snapshot(key: str, row: HealthRow) -> HealthSnapshot:
    return HealthSnapshot(
        id=key,
        date=row.date,
        steps=row.steps,
        active_energy=row.active_energy,
        resting_energy=row.resting_energy,
        total_calories_burned=row.total_calories_burned,
        note=row.note,
    )


def _write_timestamp() -> dict[str, object]:
    return {"timestamp": time.time()}


FOOD_SCHEMA: LogSchema[FoodEntry] = LogSchema(
    category=LogCategory.FOOD,
    row_model=FoodRow,
    to_entry=_food_entry,
    signals_widget=True,
)

EXERCISE_SCHEMA: LogSchema[ExerciseEntry] = LogSchema(
    category=LogCategory.EXERCISE,
    row_model=ExerciseRow,
    to_entry=_exercise_entry,
)

WEIGHT_SCHEMA: LogSchema[WeightEntry] = LogSchema(
    category=LogCategory.WEIGHT,
    row_model=WeightRow,
    to_entry=_weight_entry,
    generated_fields=_write_timestamp,
    sort_key=lambda entry: entry.timestamp,
    sort_descending=True,
)

HEALTH_SCHEMA: LogSchema[HealthSnapshot] = LogSchema(
    category=LogCategory.HEALTH,
    row_model=HealthRow,
    to_entry=_health_snapshot,
    keyed_by_date=True,
)
