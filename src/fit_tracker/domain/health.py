"""Health sensor models."""

from dataclasses import dataclass
from enum import StrEnum


class HealthAuthorization(StrEnum):
    """Binary read permission for the health sensors."""

    GRANTED = "granted"
    DENIED = "denied"


@dataclass(frozen=True)
class HealthReadings:
    """Today's step and energy counters as reported by the device."""

    steps: int = 0
    active_energy: float = 0.0
    resting_energy: float = 0.0

    @property
    def total_calories_burned(self) -> float:
        """Active plus resting energy."""
        return self.active_energy + self.resting_energy
