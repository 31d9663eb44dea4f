"""
Unit tests for UpdateWorkoutUseCase.
"""
import pytest

from application.use_cases import UpdateWorkoutUseCase
from backend.core.challenge_engine import add_contribution
from domain.models import ChallengeInstance, EnergyMetric
from tests.fakes import FakeWorkoutRepository, energy_workout

pytestmark = pytest.mark.unit


@pytest.fixture
def seeded(state, workout_repo):
    """State and repository both holding workout w1 (400 kJ)."""
    workout = energy_workout(400, workout_id="w1")
    workout_repo.seed(state.user_id, [workout])
    state.workouts.append(workout)
    return state


@pytest.fixture
def use_case(workout_repo, achievement_repo) -> UpdateWorkoutUseCase:
    return UpdateWorkoutUseCase(workout_repo=workout_repo, achievement_repo=achievement_repo)


class TestUpdateWorkout:
    def test_updates_state_and_store(self, use_case, seeded, workout_repo):
        result = use_case.execute(seeded, "w1", {"notes": "windy", "metric": {"kind": "energy", "kj": 500}})

        assert result.success
        assert result.persisted
        assert seeded.find_workout("w1").notes == "windy"
        assert seeded.find_workout("w1").metric == EnergyMetric(kj=500)
        assert workout_repo.get_all(seeded.user_id)[0].notes == "windy"

    def test_not_found(self, use_case, state):
        result = use_case.execute(state, "missing", {"notes": "x"})
        assert result.not_found
        assert not result.success

    def test_unknown_and_immutable_fields_rejected(self, use_case, seeded):
        result = use_case.execute(seeded, "w1", {"id": "w2", "colour": "red"})

        assert not result.success
        assert result.error == "Invalid changes"
        assert "Unknown field: colour" in result.validation_errors
        assert "Field cannot be changed: id" in result.validation_errors
        assert seeded.find_workout("w1") is not None

    def test_invalid_value_rejected(self, use_case, seeded):
        result = use_case.execute(seeded, "w1", {"intensity": 11})

        assert not result.success
        assert result.validation_errors
        assert seeded.find_workout("w1").intensity is None

    def test_contributions_are_not_recomputed(self, use_case, seeded):
        instance = ChallengeInstance(template_id="t", title="T", kind="climbing", target=1000)
        add_contribution(instance, "w1", 289.48)
        seeded.active_challenges.append(instance)

        use_case.execute(seeded, "w1", {"metric": {"kind": "energy", "kj": 1000}})

        assert instance.progress == pytest.approx(289.48)

    def test_edit_can_unlock_badges(self, use_case, seeded):
        seeded.unlocked_badges = ["first-ride"]
        result = use_case.execute(seeded, "w1", {"metric": {"kind": "energy", "kj": 600}})
        assert [b.id for b in result.new_badges] == ["eiffel"]

    def test_provisional_workout_not_written(self, state, achievement_repo):
        repo = FakeWorkoutRepository()
        provisional = energy_workout(400).provisional()
        state.workouts.append(provisional)

        result = UpdateWorkoutUseCase(repo, achievement_repo).execute(state, provisional.id, {"notes": "x"})

        assert result.success
        assert not result.persisted
        assert result.error == "Workout is not yet persisted"
        assert "update" not in repo.calls

    def test_failed_write_reported(self, seeded, achievement_repo):
        result = UpdateWorkoutUseCase(FakeWorkoutRepository(fail_writes=True), achievement_repo).execute(
            seeded, "w1", {"notes": "x"}
        )
        assert result.success
        assert not result.persisted
        assert seeded.find_workout("w1").notes == "x"
