"""
Unit tests for backend/core/progress_aggregator.py
"""
import random
from datetime import date

import pytest

from backend.core.progress_aggregator import (
    compute_totals,
    compute_weekly_progress,
    week_bounds,
    workout_elevation_meters,
)
from tests.fakes import distance_workout, energy_workout

pytestmark = pytest.mark.unit

RIDER_KG = 80.0


class TestComputeTotals:
    def test_distance_buckets(self):
        """10 mi bike plus 5 mi run."""
        totals = compute_totals(
            [distance_workout(10, type="bike"), distance_workout(5, type="run")],
            RIDER_KG,
        )

        assert totals.cycling_distance_km == pytest.approx(16.09, abs=0.01)
        assert totals.running_distance_km == pytest.approx(8.05, abs=0.01)
        assert totals.distance_km == pytest.approx(24.14, abs=0.01)
        assert totals.climbing_meters == 0
        assert totals.workout_count == 2

    def test_walk_and_hike_count_as_running(self):
        totals = compute_totals(
            [distance_workout(2, type="walk"), distance_workout(3, type="hike")],
            RIDER_KG,
        )
        assert totals.running_distance_miles == pytest.approx(5.0)

    def test_custom_type_counts_only_toward_total(self):
        totals = compute_totals([distance_workout(4, type="Kayak")], RIDER_KG)
        assert totals.distance_miles == pytest.approx(4.0)
        assert totals.cycling_distance_km == 0
        assert totals.running_distance_km == 0

    def test_energy_workouts_feed_climbing(self):
        totals = compute_totals([energy_workout(400)], RIDER_KG)
        assert totals.climbing_meters == pytest.approx(289.47, abs=0.1)
        assert totals.climbing_feet == pytest.approx(949.75, abs=0.5)
        assert totals.distance_km == 0

    def test_empty_history(self):
        totals = compute_totals([], RIDER_KG)
        assert totals.climbing_meters == 0
        assert totals.workout_count == 0

    @pytest.mark.parametrize("seed", range(5))
    def test_total_is_sum_of_workouts(self, seed):
        rng = random.Random(seed)
        workouts = [energy_workout(rng.uniform(0, 1500)) for _ in range(rng.randint(1, 25))]
        expected = sum(workout_elevation_meters(w, RIDER_KG) for w in workouts)
        assert compute_totals(workouts, RIDER_KG).climbing_meters == pytest.approx(expected)


class TestWeeklyProgress:
    def test_week_starts_monday(self):
        assert week_bounds(date(2024, 5, 1)) == (date(2024, 4, 29), date(2024, 5, 5))
        assert week_bounds(date(2024, 4, 29)) == (date(2024, 4, 29), date(2024, 5, 5))
        assert week_bounds(date(2024, 5, 5)) == (date(2024, 4, 29), date(2024, 5, 5))

    def test_only_counts_current_week(self):
        workouts = [
            energy_workout(400, day=date(2024, 4, 29)),
            energy_workout(400, day=date(2024, 4, 28)),
        ]
        weekly = compute_weekly_progress(workouts, RIDER_KG, 1000, date(2024, 5, 1))

        assert weekly.climbed_meters == pytest.approx(289.48)
        assert weekly.percent == pytest.approx(28.9)
        assert weekly.goal_reached is False

    def test_percent_capped_at_100(self):
        workouts = [energy_workout(2000, day=date(2024, 5, 1))]
        weekly = compute_weekly_progress(workouts, RIDER_KG, 100, date(2024, 5, 1))
        assert weekly.percent == 100.0
        assert weekly.goal_reached is True

    def test_no_goal(self):
        workouts = [energy_workout(400, day=date(2024, 5, 1))]
        weekly = compute_weekly_progress(workouts, RIDER_KG, None, date(2024, 5, 1))
        assert weekly.percent == 0.0
        assert weekly.goal_reached is False
        assert weekly.climbed_meters > 0
