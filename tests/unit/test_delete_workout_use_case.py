"""
Unit tests for DeleteWorkoutUseCase.

Tests for:
- Contribution reversal across every active instance
- Trophy revocation when an instance drops below its target
- Best-effort persistence of each affected collection
"""
import pytest

from application.use_cases import DeleteWorkoutUseCase
from backend.core.challenge_engine import add_contribution, sync_trophies
from domain.models import ChallengeInstance
from tests.fakes import FakeChallengeRepository, FakeWorkoutRepository, energy_workout

pytestmark = pytest.mark.unit


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def use_case(workout_repo, challenge_repo, achievement_repo) -> DeleteWorkoutUseCase:
    return DeleteWorkoutUseCase(
        workout_repo=workout_repo,
        challenge_repo=challenge_repo,
        achievement_repo=achievement_repo,
    )


@pytest.fixture
def completed_state(state, workout_repo):
    """
    Two persisted workouts; w1 alone completes a 250 m instance and also
    contributes to a 1000 m instance.
    """
    w1 = energy_workout(400, workout_id="w1")
    w2 = energy_workout(100, workout_id="w2")
    workout_repo.seed(state.user_id, [w1, w2])
    state.workouts.extend([w1, w2])

    small = ChallengeInstance(instance_id="small", template_id="s", title="Small", kind="climbing", target=250)
    big = ChallengeInstance(instance_id="big", template_id="b", title="Big", kind="climbing", target=1000)
    add_contribution(small, "w1", 289.48)
    add_contribution(big, "w1", 289.48)
    add_contribution(big, "w2", 72.37)
    state.active_challenges.extend([small, big])
    state.trophies = sync_trophies(state.active_challenges, []).trophies
    return state


# =============================================================================
# Tests
# =============================================================================


class TestDeleteWorkout:
    def test_reverses_contributions_and_revokes(self, use_case, completed_state, challenge_repo, achievement_repo):
        assert len(completed_state.trophies) == 1

        result = use_case.execute(completed_state, "w1")

        assert result.success
        assert result.persisted
        assert result.affected_instances == 2
        assert [t.instance_id for t in result.revoked_trophies] == ["small"]
        assert completed_state.trophies == []
        assert completed_state.find_instance("small").progress == 0
        assert completed_state.find_instance("big").progress == pytest.approx(72.37)
        assert challenge_repo.get_active(completed_state.user_id)[1].progress == pytest.approx(72.37)
        assert achievement_repo.get_trophies(completed_state.user_id) == []

    def test_workout_without_contributions(self, use_case, state, workout_repo, challenge_repo):
        workout = energy_workout(50, workout_id="w9")
        workout_repo.seed(state.user_id, [workout])
        state.workouts.append(workout)

        result = use_case.execute(state, "w9")

        assert result.success
        assert result.affected_instances == 0
        assert challenge_repo.save_count == 0
        assert workout_repo.get_all(state.user_id) == []

    def test_not_found(self, use_case, state):
        result = use_case.execute(state, "nope")
        assert result.not_found
        assert not result.success

    def test_provisional_workout_skips_store(self, use_case, state, workout_repo):
        provisional = energy_workout(50).provisional()
        state.workouts.append(provisional)

        result = use_case.execute(state, provisional.id)

        assert result.persisted
        assert "delete" not in workout_repo.calls
        assert state.workouts == []

    def test_trophy_of_removed_instance_survives_delete(self, use_case, completed_state):
        completed_state.active_challenges = [i for i in completed_state.active_challenges if i.instance_id != "small"]

        use_case.execute(completed_state, "w1")

        assert [t.instance_id for t in completed_state.trophies] == ["small"]

    def test_failed_writes_reported(self, completed_state, achievement_repo):
        use_case = DeleteWorkoutUseCase(
            FakeWorkoutRepository(fail_writes=True),
            FakeChallengeRepository(fail_writes=True),
            achievement_repo,
        )

        result = use_case.execute(completed_state, "w1")

        assert result.success
        assert not result.persisted
        assert result.error == "Not yet persisted: workout, challenges"
        assert completed_state.find_workout("w1") is None
