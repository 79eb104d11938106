"""Profile and goal models."""

from dataclasses import dataclass, field

DEFAULT_GENDER = "Not Specified"


@dataclass(frozen=True)
class MacroGoals:
    """Daily nutrition targets and the target body weight."""

    calories: int = 2000
    protein: int = 150
    carbs: int = 250
    fat: int = 65
    weight_goal: int = 150


@dataclass(frozen=True)
class Profile:
    """Body metrics and goals for a user."""

    height_feet: int = 5
    height_inches: int = 8
    age: int = 25
    gender: str = DEFAULT_GENDER
    macro_goals: MacroGoals = field(default_factory=MacroGoals)
