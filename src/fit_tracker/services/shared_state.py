"""Cross-process key/value handoff between the app and the widget."""

from typing import Protocol

USER_ID_KEY = "userId"
WIDGET_SNAPSHOT_KEY = "widgetSnapshot"
WIDGET_REFRESH_REQUESTED_KEY = "widgetRefreshRequestedAt"


class SharedStore(Protocol):
    """Key/value store shared by processes in the same app group."""

    def get(self, key: str) -> object | None:
        """Return the stored value for key, if present."""

    def set(self, key: str, value: object) -> None:
        """Store a JSON-serialisable value under key."""
