"""Supabase-backed record store."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient

from fit_tracker.domain.errors import (
    NetworkUnavailableError,
    StoreError,
    UnauthorizedError,
)
from fit_tracker.domain.logs import LogCategory, StoredRecord
from fit_tracker.services.keys import RecordKeyGenerator
from fit_tracker.services.records import RecordStore

_PERMISSION_CODES = {"42501", "PGRST301", "PGRST302"}

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseRecordStore(RecordStore):
    """Store records as rows of ``(user_id, category, key, date, payload)``."""

    client: AsyncClient
    table_name: str = "records"
    key_generator: RecordKeyGenerator = field(default_factory=RecordKeyGenerator)

    async def write(
        self,
        user_id: str,
        category: LogCategory,
        key: str | None,
        data: dict[str, object],
    ) -> str:
        """Upsert a record, generating a time-ordered key when none is given."""
        resolved_key = key or self.key_generator.next_key()
        with _translate_errors("write", category):
            await (
                self.client.table(self.table_name)
                .upsert(
                    {
                        "user_id": user_id,
                        "category": category.value,
                        "key": resolved_key,
                        "date": data.get("date"),
                        "payload": data,
                    },
                    on_conflict="user_id,category,key",
                )
                .execute()
            )
        return resolved_key

    async def read(
        self, user_id: str, category: LogCategory, key: str
    ) -> StoredRecord | None:
        """Return the record stored under key, if any."""
        with _translate_errors("read", category):
            response = await (
                self.client.table(self.table_name)
                .select("key, payload")
                .eq("user_id", user_id)
                .eq("category", category.value)
                .eq("key", key)
                .limit(1)
                .execute()
            )
        records = _parse_rows(response.data or [], category)
        return records[0] if records else None

    async def query_by_date(
        self, user_id: str, category: LogCategory, date: str
    ) -> list[StoredRecord]:
        """Return records for an exact date string in key order."""
        with _translate_errors("query", category):
            response = await (
                self.client.table(self.table_name)
                .select("key, payload")
                .eq("user_id", user_id)
                .eq("category", category.value)
                .eq("date", date)
                .order("key", desc=False)
                .execute()
            )
        return _parse_rows(response.data or [], category)

    async def delete(self, user_id: str, category: LogCategory, key: str) -> None:
        """Delete the record stored under key."""
        with _translate_errors("delete", category):
            await (
                self.client.table(self.table_name)
                .delete()
                .eq("user_id", user_id)
                .eq("category", category.value)
                .eq("key", key)
                .execute()
            )


@contextmanager
def _translate_errors(action: str, category: LogCategory) -> Iterator[None]:
    try:
        yield
    except APIError as exc:
        if exc.code in _PERMISSION_CODES:
            raise UnauthorizedError(
                f"Permission denied for {action} on {category.value}"
            ) from exc
        raise StoreError(f"Store {action} failed: {exc.message}") from exc
    except httpx.TransportError as exc:
        raise NetworkUnavailableError(
            f"Store unreachable during {action} on {category.value}"
        ) from exc


def _parse_rows(
    rows: list[dict[str, object]], category: LogCategory
) -> list[StoredRecord]:
    records: list[StoredRecord] = []
    for row in rows:
        key = row.get("key")
        payload = row.get("payload")
        if not isinstance(key, str) or not isinstance(payload, dict):
            _logger.warning("Skipping malformed %s row: %r", category.value, row)
            continue
        records.append(StoredRecord(key=key, data=payload))
    return records
