"""Widget snapshot models."""

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import StrEnum

ERROR_OVERLAY_MESSAGE = "There was a problem reading your data"
EMPTY_DAY_MESSAGE = "No foods logged today"


class WidgetState(StrEnum):
    """Lifecycle of a widget refresh."""

    IDLE = "idle"
    FETCHING = "fetching"
    RENDERED = "rendered"
    ERROR = "error"


@dataclass(frozen=True)
class WidgetSnapshot:
    """Rendered macro summary shown on the home screen."""

    rendered_at: datetime
    next_refresh_at: datetime
    calories: float
    protein: float
    carbs: float
    fat: float
    calorie_goal: float
    protein_goal: float
    carbs_goal: float
    fat_goal: float
    is_empty_day: bool
    has_error: bool
    message: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serialisable representation."""
        payload = asdict(self)
        payload["rendered_at"] = self.rendered_at.isoformat()
        payload["next_refresh_at"] = self.next_refresh_at.isoformat()
        return payload
