"""
Unit conversion constants and helpers shared across the engine.

Energy is always kilojoules at the boundary. Mass, distance and elevation
are normalized to kilograms, kilometers and meters respectively before any
computation happens.
"""

from typing import Literal, Optional

# Conversion constants
LB_TO_KG = 0.453592
MILES_TO_KM = 1.60934
FEET_TO_METERS = 0.3048
METERS_TO_FEET = 3.28084
KCAL_TO_KJ = 4.184

WeightUnit = Literal["kg", "lbs"]
DistanceUnit = Literal["km", "mi"]


def to_kg(weight: float, unit: Optional[str] = "kg") -> float:
    """
    Normalize a body weight to kilograms.

    Args:
        weight: Weight value in the given unit
        unit: "kg" or "lbs" (anything else is treated as kg)

    Returns:
        Weight in kilograms.
    """
    if unit == "lbs":
        return weight * LB_TO_KG
    return weight


def miles_to_km(miles: float) -> float:
    """Convert miles to kilometers."""
    return miles * MILES_TO_KM


def km_to_miles(km: float) -> float:
    """Convert kilometers to miles."""
    return km / MILES_TO_KM


def feet_to_meters(feet: float) -> float:
    """Convert feet to meters."""
    return feet * FEET_TO_METERS


def meters_to_feet(meters: float) -> float:
    """Convert meters to feet."""
    return meters * METERS_TO_FEET
