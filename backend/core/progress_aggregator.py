"""
Progress Aggregator.

Lifetime and weekly totals folded from the full workout history. Totals are
recomputed from scratch on every call; personal histories are small enough
that no incremental cache is kept.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from domain.models.units import km_to_miles, meters_to_feet
from domain.models.workout import Workout
from backend.core.physics import calculate_elevation, round_half_up


@dataclass
class ProgressTotals:
    """Cumulative totals across a set of workouts."""

    climbing_meters: float = 0.0
    distance_km: float = 0.0
    cycling_distance_km: float = 0.0
    running_distance_km: float = 0.0
    workout_count: int = 0

    @property
    def climbing_feet(self) -> float:
        return meters_to_feet(self.climbing_meters)

    @property
    def distance_miles(self) -> float:
        return km_to_miles(self.distance_km)

    @property
    def cycling_distance_miles(self) -> float:
        return km_to_miles(self.cycling_distance_km)

    @property
    def running_distance_miles(self) -> float:
        return km_to_miles(self.running_distance_km)


@dataclass
class WeeklyProgress:
    """Climbing progress against the weekly goal."""

    week_start: date
    week_end: date
    climbed_meters: float
    goal_meters: Optional[float]
    percent: float
    goal_reached: bool


def workout_elevation_meters(workout: Workout, rider_weight_kg: float) -> float:
    """Elevation credited to one workout; 0 for distance-based workouts."""
    if workout.energy_kj is None:
        return 0.0
    return calculate_elevation(workout.energy_kj, rider_weight_kg).meters


def compute_totals(workouts: Iterable[Workout], rider_weight_kg: float) -> ProgressTotals:
    """
    Fold a workout history into lifetime totals.

    Energy workouts feed climbing, distance workouts feed distance. Distance
    is also bucketed by type: bike into cycling, run/walk/hike into running;
    custom types count only toward the overall distance.

    Args:
        workouts: Full workout history
        rider_weight_kg: Rider weight used for the physics conversion

    Returns:
        ProgressTotals
    """
    totals = ProgressTotals()

    for workout in workouts:
        totals.workout_count += 1

        if workout.is_energy_based:
            totals.climbing_meters += workout_elevation_meters(workout, rider_weight_kg)
            continue

        km = workout.distance_km or 0.0
        totals.distance_km += km
        if workout.is_cycling:
            totals.cycling_distance_km += km
        elif workout.is_running:
            totals.running_distance_km += km

    return totals


def week_bounds(day: date) -> "tuple[date, date]":
    """Monday and Sunday of the week containing ``day``."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def compute_weekly_progress(
    workouts: Iterable[Workout],
    rider_weight_kg: float,
    weekly_goal_m: Optional[float],
    week_of: date,
) -> WeeklyProgress:
    """
    Meters climbed during the week containing ``week_of``.

    Args:
        workouts: Full workout history
        rider_weight_kg: Rider weight for the physics conversion
        weekly_goal_m: Weekly climbing goal in meters, or None when unset
        week_of: Any day inside the week of interest

    Returns:
        WeeklyProgress with percent capped at 100 (0 when no goal is set)
    """
    start, end = week_bounds(week_of)
    climbed = sum(
        workout_elevation_meters(w, rider_weight_kg)
        for w in workouts
        if start <= w.date <= end
    )

    if weekly_goal_m and weekly_goal_m > 0:
        percent = round_half_up(min(100.0, climbed / weekly_goal_m * 100), 1)
        reached = climbed >= weekly_goal_m
    else:
        percent = 0.0
        reached = False

    return WeeklyProgress(
        week_start=start,
        week_end=end,
        climbed_meters=round_half_up(climbed, 2),
        goal_meters=weekly_goal_m,
        percent=percent,
        goal_reached=reached,
    )
