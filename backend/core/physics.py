"""
Physics conversion from workout energy to simulated vertical elevation.

Treats the rider and bike as a single mass lifted against gravity:
potential energy E = m * g * h, so h = E / (m * g). Also produces the
landmark comparison text shown next to every climb.
"""
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Tuple

# =============================================================================
# Constants
# =============================================================================

BIKE_WEIGHT_KG = 61.0
GRAVITY = 9.8  # m/s^2
FEET_PER_METER = 3.281
EVEREST_HEIGHT_M = 8849.0

ZERO_STATE_TEXT = "Ready to climb?"

# Ordered by ascending height
LANDMARKS: List[Tuple[str, float]] = [
    ("Eiffel Tower", 330.0),
    ("Empire State Building", 443.0),
    ("Burj Khalifa", 828.0),
    ("Mount Everest", EVEREST_HEIGHT_M),
]


@dataclass(frozen=True)
class ElevationResult:
    """Height climbed for one energy value."""

    meters: float
    feet: float
    landmark_text: str


ZERO_ELEVATION = ElevationResult(meters=0.0, feet=0.0, landmark_text=ZERO_STATE_TEXT)


# =============================================================================
# Rounding
# =============================================================================


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round the exact binary value of ``value`` half-up to ``digits`` places.

    Unlike the builtin ``round`` (banker's rounding), ties go away from zero,
    which keeps displayed values stable for the same inputs everywhere.

    Examples:
        >>> round_half_up(2.5)
        3.0
        >>> round_half_up(289.4736842, 2)
        289.47
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_fixed(value: float, digits: int) -> str:
    """Format with a fixed number of decimals using half-up rounding."""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _is_positive(value: Optional[float]) -> bool:
    if value is None:
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number > 0


# =============================================================================
# Conversion
# =============================================================================


def landmark_text(meters: float) -> str:
    """
    Describe a climb by comparing it to well-known landmarks.

    Args:
        meters: Height climbed (unrounded)

    Returns:
        Human-readable comparison
    """
    if meters < 100:
        return f"That's about {format_fixed(meters / 3, 0)} stories high!"

    for name, height in LANDMARKS:
        ratio = meters / height
        if ratio < 1:
            return f"You are {format_fixed(ratio * 100, 1)}% of the way up the {name}!"
        if ratio < 2:
            return f"You just climbed the {name}!"

    return f"You climbed the equivalent of Mount Everest {format_fixed(meters / EVEREST_HEIGHT_M, 1)} times!"


def height_meters(energy_kj: float, rider_mass_kg: float) -> float:
    """Unrounded height in meters; callers validate inputs first."""
    total_mass_kg = rider_mass_kg + BIKE_WEIGHT_KG
    energy_joules = energy_kj * 1000
    return energy_joules / (total_mass_kg * GRAVITY)


def calculate_elevation(energy_kj: Optional[float], rider_mass_kg: Optional[float]) -> ElevationResult:
    """
    Convert energy output into vertical elevation climbed.

    Non-positive, missing or non-numeric inputs yield the zero state instead
    of raising.

    Args:
        energy_kj: Workout output in kilojoules
        rider_mass_kg: Rider weight in kilograms (bike mass is added here)

    Returns:
        ElevationResult with meters and feet rounded to 2 decimals

    Examples:
        >>> calculate_elevation(400, 80).meters
        289.48
    """
    if not _is_positive(energy_kj) or not _is_positive(rider_mass_kg):
        return ZERO_ELEVATION

    meters = height_meters(float(energy_kj), float(rider_mass_kg))
    feet = meters * FEET_PER_METER

    return ElevationResult(
        meters=round_half_up(meters, 2),
        feet=round_half_up(feet, 2),
        landmark_text=landmark_text(meters),
    )
