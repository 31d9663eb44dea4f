"""
Calorie Estimator.

Heuristic energy estimate for workouts logged without a power meter:
- MET lookup by keyword match on the workout description
- Intensity scaling of the base MET
- Optional Keytel heart-rate regression, averaged with the MET estimate

The result feeds the same kilojoule field a measured workout would use.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from domain.models.units import KCAL_TO_KJ, WeightUnit, to_kg
from backend.core.physics import round_half_up

# =============================================================================
# MET Table
# =============================================================================

# (keywords, MET, label), first match wins
MET_TABLE: List[Tuple[Tuple[str, ...], float, str]] = [
    (("run", "jog", "sprint", "marathon"), 8.0, "Running"),
    (("bike", "cycle", "cycling", "spin"), 7.0, "Cycling"),
    (("swim", "pool", "laps"), 6.0, "Swimming"),
    (("walk", "stroll"), 3.5, "Walking"),
    (("hike", "hiking", "climb"), 7.0, "Hiking"),
    (("lift", "weight", "strength", "gym", "muscle"), 5.0, "Strength Training"),
    (("hiit", "interval", "crossfit", "bootcamp"), 8.0, "HIIT"),
    (("yoga", "pilates", "stretch"), 3.0, "Yoga & Stretching"),
    (("dance", "zumba"), 6.0, "Dance"),
    (("row", "erg"), 7.0, "Rowing"),
]

DEFAULT_MET = 5.0
DEFAULT_ACTIVITY = "General Workout"
DEFAULT_INTENSITY = 5

ESTIMATION_FIELDS = ("age", "weight", "gender", "height", "duration", "intensity")


@dataclass
class EstimatorProfile:
    """Demographics used by the estimate."""

    age_years: Optional[int] = None
    gender: Optional[str] = None
    weight: Optional[float] = None
    weight_unit: WeightUnit = "kg"
    height_cm: Optional[float] = None

    @property
    def weight_kg(self) -> float:
        if not self.weight or self.weight <= 0:
            return 0.0
        return to_kg(self.weight, self.weight_unit)


@dataclass
class EstimatorWorkout:
    """Workout descriptors used by the estimate."""

    description: str = ""
    intensity: Optional[int] = None
    duration_minutes: Optional[float] = None
    heart_rate_bpm: Optional[float] = None


@dataclass
class CalorieEstimate:
    """Result of a calorie estimate."""

    calories: int
    kj: int
    met_used: float
    explanation: str
    activity: str = DEFAULT_ACTIVITY
    heart_rate_blended: bool = False


# =============================================================================
# Helpers
# =============================================================================


def match_activity(description: Optional[str]) -> Tuple[float, str]:
    """
    Pick the base MET for a free-text description.

    Returns:
        (met, activity label); the general default when nothing matches
    """
    text = (description or "").lower()
    for keywords, met, label in MET_TABLE:
        if any(keyword in text for keyword in keywords):
            return met, label
    return DEFAULT_MET, DEFAULT_ACTIVITY


def intensity_multiplier(intensity: Optional[int]) -> float:
    """0.68x at intensity 1, 1.0x at 5, 1.4x at 10."""
    level = DEFAULT_INTENSITY if intensity is None else max(1, min(10, int(intensity)))
    return 0.6 + level * 0.08


def keytel_calories(
    heart_rate: float,
    weight_kg: float,
    age_years: float,
    duration_minutes: float,
    gender: Optional[str],
) -> float:
    """
    Keytel et al. heart-rate regression, in kilocalories.

    Female coefficients apply to "female"; every other value uses the male
    coefficients.
    """
    if gender == "female":
        per_minute_kj = -20.4022 + 0.4472 * heart_rate - 0.1263 * weight_kg + 0.074 * age_years
    else:
        per_minute_kj = -55.0969 + 0.6309 * heart_rate + 0.1988 * weight_kg + 0.2017 * age_years
    return per_minute_kj * duration_minutes / KCAL_TO_KJ


def missing_estimation_fields(profile: EstimatorProfile, workout: EstimatorWorkout) -> List[str]:
    """
    List the prerequisites an automatic estimate still needs.

    Returns:
        Missing field names in a stable order, empty when the estimate can run
    """
    present = {
        "age": bool(profile.age_years and profile.age_years > 0),
        "weight": bool(profile.weight and profile.weight > 0),
        "gender": bool(profile.gender),
        "height": bool(profile.height_cm and profile.height_cm > 0),
        "duration": bool(workout.duration_minutes and workout.duration_minutes > 0),
        "intensity": workout.intensity is not None,
    }
    return [name for name in ESTIMATION_FIELDS if not present[name]]


# =============================================================================
# Estimate
# =============================================================================


def estimate_calories(profile: EstimatorProfile, workout: EstimatorWorkout) -> CalorieEstimate:
    """
    Estimate calories and kilojoules for a workout.

    Args:
        profile: Rider demographics (weight in kg or lbs)
        workout: Description, intensity, duration and optional heart rate

    Returns:
        CalorieEstimate with integer calories/kJ and a 1-decimal MET
    """
    duration = workout.duration_minutes or 0
    if duration <= 0:
        return CalorieEstimate(calories=0, kj=0, met_used=0.0, explanation="Duration is 0")

    base_met, activity = match_activity(workout.description)
    adjusted_met = base_met * intensity_multiplier(workout.intensity)
    weight_kg = profile.weight_kg

    met_calories = adjusted_met * weight_kg * (duration / 60)
    calories = met_calories
    blended = False

    if workout.heart_rate_bpm and workout.heart_rate_bpm > 0:
        hr_calories = keytel_calories(
            heart_rate=float(workout.heart_rate_bpm),
            weight_kg=weight_kg,
            age_years=float(profile.age_years or 0),
            duration_minutes=float(duration),
            gender=profile.gender,
        )
        if hr_calories > 0:
            calories = (met_calories + hr_calories) / 2
            blended = True

    intensity = DEFAULT_INTENSITY if workout.intensity is None else max(1, min(10, int(workout.intensity)))
    met_used = round_half_up(adjusted_met, 1)
    explanation = f"Estimated as {activity} (MET {met_used}) at intensity {intensity}/10."
    if blended:
        explanation += f" Averaged with a heart-rate estimate at {int(workout.heart_rate_bpm)} bpm."

    return CalorieEstimate(
        calories=int(round_half_up(calories)),
        kj=int(round_half_up(calories * KCAL_TO_KJ)),
        met_used=met_used,
        explanation=explanation,
        activity=activity,
        heart_rate_blended=blended,
    )
