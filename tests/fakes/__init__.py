"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of the repository
ports for fast, isolated testing. No database or external dependencies
required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- ``fail_writes`` toggles best-effort persistence failures
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeWorkoutRepository, create_workout_repo

    repo = FakeWorkoutRepository()
    repo.seed("user1", [workout])

    repo = create_workout_repo(user_id="user1", num_workouts=5)
"""
from datetime import date, timedelta
from typing import List, Optional

from domain.models import DistanceMetric, EnergyMetric, Workout

TEST_USER_ID = "test-user"

from tests.fakes.achievement_repository import FakeAchievementRepository
from tests.fakes.challenge_repository import FakeChallengeRepository
from tests.fakes.profile_repository import FakeProfileRepository
from tests.fakes.workout_repository import FakeWorkoutRepository


# =============================================================================
# Workout builders
# =============================================================================


def energy_workout(
    kj: float,
    *,
    workout_id: Optional[str] = None,
    day: Optional[date] = None,
    type: str = "bike",
) -> Workout:
    """Energy-based workout, dated today unless ``day`` is given."""
    return Workout(id=workout_id, date=day or date.today(), type=type, metric=EnergyMetric(kj=kj))


def distance_workout(
    miles: float,
    *,
    workout_id: Optional[str] = None,
    day: Optional[date] = None,
    type: str = "bike",
) -> Workout:
    """Distance-based workout, dated today unless ``day`` is given."""
    return Workout(id=workout_id, date=day or date.today(), type=type, metric=DistanceMetric(miles=miles))


# =============================================================================
# Factory Functions
# =============================================================================


def create_workout_repo(
    *,
    user_id: str = "test_user",
    num_workouts: int = 0,
    kj_each: float = 400.0,
) -> FakeWorkoutRepository:
    """
    Create a FakeWorkoutRepository with optional pre-populated workouts.

    Args:
        user_id: User ID for generated workouts
        num_workouts: Number of energy workouts to create, one per day back from today
        kj_each: Energy of each generated workout

    Returns:
        Pre-populated FakeWorkoutRepository
    """
    repo = FakeWorkoutRepository()

    if num_workouts > 0:
        workouts: List[Workout] = [
            energy_workout(kj_each, workout_id=f"w{i + 1}", day=date.today() - timedelta(days=i))
            for i in range(num_workouts)
        ]
        repo.seed(user_id, workouts)

    return repo


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Fake implementations
    "FakeWorkoutRepository",
    "FakeProfileRepository",
    "FakeChallengeRepository",
    "FakeAchievementRepository",
    "TEST_USER_ID",
    # Builders
    "energy_workout",
    "distance_workout",
    # Factory functions
    "create_workout_repo",
]
