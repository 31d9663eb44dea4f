"""
DeleteWorkout Use Case.

Deleting a workout cascades into the challenge engine: every contribution
it made is reversed, and trophies are re-synchronized so an instance that
drops below its target loses the trophy it had earned.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from application.ports import AchievementRepository, ChallengeRepository, WorkoutRepository
from application.use_cases.persistence import persist_best_effort
from backend.core.challenge_engine import reverse_contributions, sync_trophies
from domain.models import ProgressState, Trophy

logger = logging.getLogger(__name__)


@dataclass
class DeleteWorkoutResult:
    """Result of the DeleteWorkout use case execution."""

    success: bool
    affected_instances: int = 0
    revoked_trophies: List[Trophy] = field(default_factory=list)
    persisted: bool = False
    not_found: bool = False
    error: Optional[str] = None


class DeleteWorkoutUseCase:
    """
    Use case for deleting a workout and reversing its contributions.

    Usage:
        >>> use_case = DeleteWorkoutUseCase(workout_repo, challenge_repo, achievement_repo)
        >>> result = use_case.execute(state, "w-123")
        >>> if result.affected_instances:
        ...     refresh_challenges()
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        challenge_repo: ChallengeRepository,
        achievement_repo: AchievementRepository,
    ) -> None:
        self._workout_repo = workout_repo
        self._challenge_repo = challenge_repo
        self._achievement_repo = achievement_repo

    def execute(self, state: ProgressState, workout_id: str) -> DeleteWorkoutResult:
        """
        Execute the delete workout workflow.

        Args:
            state: The user's progress snapshot (mutated in place)
            workout_id: Id of the workout to delete

        Returns:
            DeleteWorkoutResult with the number of challenge instances affected
        """
        removed = state.remove_workout(workout_id)
        if removed is None:
            return DeleteWorkoutResult(
                success=False,
                not_found=True,
                error=f"Workout {workout_id} not found",
            )

        affected = 0
        for instance in state.active_challenges:
            if reverse_contributions(instance, workout_id):
                affected += 1

        revoked: List[Trophy] = []
        trophies_changed = False
        if affected:
            sync = sync_trophies(state.active_challenges, state.trophies)
            state.trophies = sync.trophies
            revoked = sync.revoked
            trophies_changed = sync.changed
            logger.info(
                f"Deleting workout {workout_id} reversed contributions on {affected} "
                f"instance(s), revoked {len(revoked)} trophy(ies)"
            )

        failures: List[str] = []
        if not removed.is_provisional and not persist_best_effort(
            "workout delete", self._workout_repo.delete, state.user_id, workout_id
        ):
            failures.append("workout")
        if affected and not persist_best_effort(
            "active challenges", self._challenge_repo.save_active, state.user_id, list(state.active_challenges)
        ):
            failures.append("challenges")
        if trophies_changed and not persist_best_effort(
            "trophies", self._achievement_repo.save_trophies, state.user_id, list(state.trophies)
        ):
            failures.append("trophies")

        return DeleteWorkoutResult(
            success=True,
            affected_instances=affected,
            revoked_trophies=revoked,
            persisted=not failures,
            error=f"Not yet persisted: {', '.join(failures)}" if failures else None,
        )
