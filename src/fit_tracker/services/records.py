"""Record store port."""

from typing import Protocol

from fit_tracker.domain.logs import LogCategory, StoredRecord


class RecordStore(Protocol):
    """Async CRUD over ``users/{user_id}/{category}/{key}``."""

    async def write(
        self,
        user_id: str,
        category: LogCategory,
        key: str | None,
        data: dict[str, object],
    ) -> str:
        """Write a record and return its key, generating one when key is None."""

    async def read(
        self, user_id: str, category: LogCategory, key: str
    ) -> StoredRecord | None:
        """Return a single record by key."""

    async def query_by_date(
        self, user_id: str, category: LogCategory, date: str
    ) -> list[StoredRecord]:
        """Return records whose date string equals ``date``, in key order."""

    async def delete(self, user_id: str, category: LogCategory, key: str) -> None:
        """Delete a record by key."""
