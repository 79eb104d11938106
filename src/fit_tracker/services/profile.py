"""Profile persistence and live subscriptions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from fit_tracker.domain.logs import LogCategory
from fit_tracker.domain.profile import DEFAULT_GENDER, MacroGoals, Profile
from fit_tracker.services.identity import IdentityProvider
from fit_tracker.services.logs import RefreshSignal
from fit_tracker.services.records import RecordStore

PROFILE_KEY = "profile"

ProfileObserver = Callable[[Profile], None]

_logger = logging.getLogger(__name__)


@dataclass
class ProfileService:
    """Read, replace and observe the user's profile."""

    store: RecordStore
    identity: IdentityProvider
    refresh_signal: RefreshSignal | None = None
    profile: Profile = field(default_factory=Profile, init=False)
    _observers: list[ProfileObserver] = field(default_factory=list, init=False)

    async def get_profile(self) -> Profile:
        """Return the stored profile, or defaults when none was saved."""
        user_id = await self.identity.ensure_identity()
        record = await self.store.read(user_id, LogCategory.PROFILE, PROFILE_KEY)
        if record is None:
            return Profile()
        return parse_profile(record.data)

    async def get_macro_goals(self) -> MacroGoals:
        """Return the stored macro goals, or defaults."""
        profile = await self.get_profile()
        return profile.macro_goals

    async def save_profile(self, profile: Profile) -> None:
        """Replace the stored profile and notify observers."""
        user_id = await self.identity.ensure_identity()
        await self.store.write(
            user_id, LogCategory.PROFILE, PROFILE_KEY, profile_to_dict(profile)
        )
        self._publish(profile)
        if self.refresh_signal is not None:
            try:
                await self.refresh_signal.request_refresh()
            except Exception:
                _logger.warning("Failed to send widget refresh hint", exc_info=True)

    async def subscribe(self, observer: ProfileObserver) -> Callable[[], None]:
        """Push the current profile to observer now and after every change.

        Returns a callable that removes the observer.
        """
        profile = await self.get_profile()
        self.profile = profile
        self._observers.append(observer)
        observer(profile)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    async def refresh(self) -> Profile:
        """Re-read the profile and publish it to observers."""
        profile = await self.get_profile()
        self._publish(profile)
        return profile

    def _publish(self, profile: Profile) -> None:
        self.profile = profile
        for observer in list(self._observers):
            observer(profile)


def profile_to_dict(profile: Profile) -> dict[str, object]:
    """Serialise a profile in its stored shape."""
    goals = profile.macro_goals
    return {
        "heightFeet": profile.height_feet,
        "heightInches": profile.height_inches,
        "age": profile.age,
        "gender": profile.gender,
        "macroGoals": macro_goals_to_dict(goals),
    }


def macro_goals_to_dict(goals: MacroGoals) -> dict[str, int]:
    """Serialise macro goals in their stored shape."""
    return {
        "calories": goals.calories,
        "protein": goals.protein,
        "carbs": goals.carbs,
        "fat": goals.fat,
        "weightGoal": goals.weight_goal,
    }


def parse_profile(data: dict[str, object]) -> Profile:
    """Parse a stored profile, defaulting each missing or invalid field."""
    defaults = Profile()
    gender = data.get("gender")
    macro_data = data.get("macroGoals")
    return Profile(
        height_feet=_int_or(data.get("heightFeet"), defaults.height_feet),
        height_inches=_int_or(data.get("heightInches"), defaults.height_inches),
        age=_int_or(data.get("age"), defaults.age),
        gender=gender if isinstance(gender, str) else DEFAULT_GENDER,
        macro_goals=parse_macro_goals(
            macro_data if isinstance(macro_data, dict) else {}
        ),
    )


def parse_macro_goals(data: dict[str, object]) -> MacroGoals:
    """Parse stored macro goals, defaulting each missing or invalid field."""
    defaults = MacroGoals()
    return MacroGoals(
        calories=_int_or(data.get("calories"), defaults.calories),
        protein=_int_or(data.get("protein"), defaults.protein),
        carbs=_int_or(data.get("carbs"), defaults.carbs),
        fat=_int_or(data.get("fat"), defaults.fat),
        weight_goal=_int_or(data.get("weightGoal"), defaults.weight_goal),
    )


def _int_or(value: object, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return default
