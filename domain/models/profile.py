"""
User profile and preferences.

Holds the rider weight used by the physics conversion, the demographics
used by calorie estimation, and the display preferences the presentation
layer reads back.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from domain.models.units import DistanceUnit, WeightUnit, to_kg

Gender = Literal["male", "female", "other"]
Theme = Literal["theme-dark", "theme-light", "theme-neon"]


class UserProfile(BaseModel):
    """
    Profile settings for a single user account.

    Examples:
        >>> profile = UserProfile(weight=176, weight_unit="lbs")
        >>> round(profile.weight_kg, 1)
        79.8
    """

    weight: Optional[float] = Field(default=None, gt=0, le=1000)
    weight_unit: WeightUnit = "kg"
    distance_unit: DistanceUnit = "km"
    age: Optional[int] = Field(default=None, gt=0, le=120)
    gender: Optional[Gender] = None
    height_cm: Optional[float] = Field(default=None, gt=0, le=300)
    weekly_goal: Optional[float] = Field(
        default=None,
        gt=0,
        description="Weekly climbing goal in meters",
    )
    theme: Theme = "theme-dark"

    @property
    def weight_kg(self) -> Optional[float]:
        """Weight normalized to kilograms, or None when unset."""
        if self.weight is None:
            return None
        return to_kg(self.weight, self.weight_unit)

    def rider_weight_kg(self, default: float) -> float:
        """Weight in kg, falling back to ``default`` when the profile has none."""
        weight = self.weight_kg
        return weight if weight is not None else default
