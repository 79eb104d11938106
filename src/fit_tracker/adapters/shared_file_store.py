"""File-backed implementation of the app-group shared store."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from fit_tracker.services.shared_state import SharedStore

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileSharedStore(SharedStore):
    """Shared store keeping one JSON document per key under a directory.

    Every key lives in its own file, so a write from one process never
    rewrites a value owned by another. Files are replaced with ``os.replace``
    and readers see either the old or the new document.
    """

    directory: Path

    def get(self, key: str) -> object | None:
        """Return the value for key, or None when absent or unreadable."""
        path = self._path(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            _logger.warning("Ignoring unreadable shared value at %s", path)
            return None

    def set(self, key: str, value: object) -> None:
        """Persist value under key."""
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f"{path.name}.{os.getpid()}.tmp")
        tmp_path.write_text(json.dumps(value, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, path)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or key.startswith("."):
            raise ValueError(f"Invalid shared store key: {key!r}")
        return self.directory / f"{key}.json"
