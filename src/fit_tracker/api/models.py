"""Request bodies accepted by the HTTP API."""

from datetime import date

from pydantic import BaseModel, Field

from fit_tracker.domain.profile import DEFAULT_GENDER, MacroGoals, Profile


class LogEntryRequest(BaseModel):
    """A new log entry; ``entry`` holds the category's stored fields."""

    day: date | None = None
    entry: dict[str, object]


class HealthAuthorizationRequest(BaseModel):
    granted: bool


class HealthReadingsRequest(BaseModel):
    steps: int = Field(ge=0)
    active_energy: float = Field(ge=0)
    resting_energy: float = Field(ge=0)


class MacroGoalsRequest(BaseModel):
    calories: int = Field(default=2000, ge=0)
    protein: int = Field(default=150, ge=0)
    carbs: int = Field(default=250, ge=0)
    fat: int = Field(default=65, ge=0)
    weight_goal: int = Field(default=150, ge=0)


class ProfileRequest(BaseModel):
    """Full replacement of the user's profile."""

    height_feet: int = Field(default=5, ge=0)
    height_inches: int = Field(default=8, ge=0, lt=12)
    age: int = Field(default=25, ge=0)
    gender: str = DEFAULT_GENDER
    macro_goals: MacroGoalsRequest = Field(default_factory=MacroGoalsRequest)

    def to_profile(self) -> Profile:
        goals = self.macro_goals
        return Profile(
            height_feet=self.height_feet,
            height_inches=self.height_inches,
            age=self.age,
            gender=self.gender,
            macro_goals=MacroGoals(
                calories=goals.calories,
                protein=goals.protein,
                carbs=goals.carbs,
                fat=goals.fat,
                weight_goal=goals.weight_goal,
            ),
        )
