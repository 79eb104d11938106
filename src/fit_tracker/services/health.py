"""Health sensor readings pushed by the device."""

import logging
from dataclasses import dataclass, field

from fit_tracker.domain.errors import UnauthorizedError
from fit_tracker.domain.health import HealthAuthorization, HealthReadings

_logger = logging.getLogger(__name__)


@dataclass
class HealthSensorService:
    """Hold the latest readings and whether the user allowed reading them.

    Readings are only exposed while authorization is granted; otherwise every
    counter reads as zero.
    """

    authorization: HealthAuthorization = HealthAuthorization.DENIED
    _readings: HealthReadings = field(default_factory=HealthReadings, init=False)

    @property
    def is_authorized(self) -> bool:
        return self.authorization is HealthAuthorization.GRANTED

    def set_authorization(self, granted: bool) -> HealthAuthorization:
        """Record the user's permission decision."""
        self.authorization = (
            HealthAuthorization.GRANTED if granted else HealthAuthorization.DENIED
        )
        if not granted:
            self._readings = HealthReadings()
        _logger.info("Health data authorization %s", self.authorization.value)
        return self.authorization

    def ingest(
        self, steps: int, active_energy: float, resting_energy: float
    ) -> HealthReadings:
        """Replace today's readings with values reported by the device."""
        if not self.is_authorized:
            raise UnauthorizedError("Health data access has not been granted")
        self._readings = HealthReadings(
            steps=steps,
            active_energy=active_energy,
            resting_energy=resting_energy,
        )
        return self._readings

    def current_readings(self) -> HealthReadings:
        """Return today's readings, or zeros without authorization."""
        if not self.is_authorized:
            return HealthReadings()
        return self._readings

    def disconnect(self) -> None:
        """Revoke access and forget the readings."""
        self.set_authorization(False)

    def snapshot_payload(self) -> dict[str, object]:
        """Return the current readings in stored snapshot shape."""
        readings = self.current_readings()
        return {
            "steps": readings.steps,
            "activeEnergy": readings.active_energy,
            "restingEnergy": readings.resting_energy,
            "totalCaloriesBurned": readings.total_calories_burned,
        }
