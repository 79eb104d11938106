"""Error taxonomy shared by the store, managers and widget."""


class TrackerError(Exception):
    """Base class for recoverable tracker failures."""


class StoreError(TrackerError):
    """Failure reported by the remote record store."""


class UnauthorizedError(StoreError):
    """No identity is available or the store denied permission."""


class NetworkUnavailableError(StoreError):
    """The remote service could not be reached."""


class NotFoundError(TrackerError):
    """A required value (such as the shared user id) is missing."""


class MalformedRecordError(TrackerError):
    """A stored record does not match its category schema."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Malformed record {key}: {reason}")
        self.key = key
        self.reason = reason


class EntryValidationError(TrackerError):
    """User-entered data failed validation."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
