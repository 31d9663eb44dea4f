"""
Unit tests for LogWorkoutUseCase.

Tests for:
- Provisional insert followed by id confirmation
- Best-effort persistence (state kept when the write fails)
- Elevation and badge unlocks on log
"""
from datetime import date

import pytest

from application.use_cases import LogWorkoutUseCase
from domain.models import PROVISIONAL_ID_PREFIX
from tests.fakes import FakeAchievementRepository, FakeWorkoutRepository, distance_workout, energy_workout

pytestmark = pytest.mark.unit


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def use_case(workout_repo, achievement_repo) -> LogWorkoutUseCase:
    """Create LogWorkoutUseCase with fake dependencies."""
    return LogWorkoutUseCase(workout_repo=workout_repo, achievement_repo=achievement_repo)


# =============================================================================
# Tests
# =============================================================================


class TestLogWorkout:
    def test_persisted_workout_gets_store_id(self, use_case, state, workout_repo):
        result = use_case.execute(state, energy_workout(400))

        assert result.success
        assert result.persisted
        assert result.error is None
        assert not result.workout.id.startswith(PROVISIONAL_ID_PREFIX)
        assert state.workouts[0].id == result.workout.id
        assert [w.id for w in workout_repo.get_all(state.user_id)] == [result.workout.id]

    def test_newest_first(self, use_case, state):
        use_case.execute(state, energy_workout(100, day=date(2024, 5, 1)))
        second = use_case.execute(state, energy_workout(200, day=date(2024, 5, 2)))
        assert state.workouts[0].id == second.workout.id

    def test_elevation_and_first_badge(self, use_case, state, achievement_repo):
        result = use_case.execute(state, energy_workout(400))

        assert result.elevation.meters == pytest.approx(289.47, abs=0.1)
        assert [b.id for b in result.new_badges] == ["first-ride"]
        assert state.unlocked_badges == ["first-ride"]
        assert achievement_repo.get_unlocked_badges(state.user_id) == ["first-ride"]

    def test_distance_workout_has_no_elevation(self, use_case, state):
        result = use_case.execute(state, distance_workout(10))
        assert result.elevation is None
        assert result.new_badges == []

    def test_lifetime_total_unlocks_eiffel(self, use_case, state):
        use_case.execute(state, energy_workout(400))
        result = use_case.execute(state, energy_workout(100))
        assert [b.id for b in result.new_badges] == ["eiffel"]

    def test_incoming_id_is_ignored(self, use_case, state):
        result = use_case.execute(state, energy_workout(400, workout_id="client-chosen"))
        assert result.workout.id != "client-chosen"


class TestLogWorkoutPersistenceFailure:
    def test_failed_write_keeps_provisional_record(self, state, achievement_repo):
        use_case = LogWorkoutUseCase(FakeWorkoutRepository(fail_writes=True), achievement_repo)

        result = use_case.execute(state, energy_workout(400))

        assert result.success
        assert not result.persisted
        assert result.error == "Workout saved locally but not yet persisted"
        assert result.workout.id.startswith(PROVISIONAL_ID_PREFIX)
        assert len(state.workouts) == 1

    def test_repository_exception_is_contained(self, state, achievement_repo):
        class ExplodingRepo(FakeWorkoutRepository):
            def add(self, user_id, workout):
                raise RuntimeError("connection reset")

        result = LogWorkoutUseCase(ExplodingRepo(), achievement_repo).execute(state, energy_workout(400))

        assert result.success
        assert not result.persisted
        assert state.workouts[0].is_provisional

    def test_badge_write_failure_keeps_unlock(self, state, workout_repo):
        use_case = LogWorkoutUseCase(workout_repo, FakeAchievementRepository(fail_writes=True))

        result = use_case.execute(state, energy_workout(400))

        assert not result.persisted
        assert state.unlocked_badges == ["first-ride"]
