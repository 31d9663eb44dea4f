"""
LoadProgress Use Case.

Reads every collection a user owns into a ProgressState, reconciles
trophies on load, and builds the progress summary served to clients.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from application.ports import (
    AchievementRepository,
    ChallengeRepository,
    ProfileRepository,
    WorkoutRepository,
)
from application.use_cases.log_workout import DEFAULT_RIDER_WEIGHT_KG
from application.use_cases.persistence import persist_best_effort
from backend.core.badge_evaluator import BadgeStatus, badge_statuses
from backend.core.challenge_engine import sync_trophies
from backend.core.progress_aggregator import (
    ProgressTotals,
    WeeklyProgress,
    compute_totals,
    compute_weekly_progress,
)
from domain.models import ChallengeInstance, ChallengeKind, ProgressState, Trophy, UserProfile

logger = logging.getLogger(__name__)


@dataclass
class LoadProgressResult:
    """Result of loading a user's state."""
    success: bool
    state: Optional[ProgressState] = None
    trophies_reconciled: bool = False
    error: Optional[str] = None
    unread: List[str] = field(default_factory=list)


@dataclass
class ProgressSummary:
    """Everything the progress screen shows."""
    rider_weight_kg: float
    totals: ProgressTotals
    weekly: WeeklyProgress
    badges: List[BadgeStatus] = field(default_factory=list)
    trophies: List[Trophy] = field(default_factory=list)
    active_challenges: List[ChallengeInstance] = field(default_factory=list)


class LoadProgressUseCase:
    """
    Use case for loading and summarizing a user's progress.

    Usage:
        >>> use_case = LoadProgressUseCase(profile_repo, workout_repo, challenge_repo, achievement_repo)
        >>> result = use_case.execute("user-123")
        >>> summary = use_case.summarize(result.state)
    """

    def __init__(
        self,
        profile_repo: ProfileRepository,
        workout_repo: WorkoutRepository,
        challenge_repo: ChallengeRepository,
        achievement_repo: AchievementRepository,
        default_rider_weight_kg: float = DEFAULT_RIDER_WEIGHT_KG,
    ) -> None:
        self._profile_repo = profile_repo
        self._workout_repo = workout_repo
        self._challenge_repo = challenge_repo
        self._achievement_repo = achievement_repo
        self._default_rider_weight_kg = default_rider_weight_kg

    def execute(self, user_id: str) -> LoadProgressResult:
        """
        Load the user's state and run the trophy reconciliation pass.

        If any collection cannot be read the load fails, names the unread
        collections, and writes nothing.

        Args:
            user_id: Authenticated user ID

        Returns:
            LoadProgressResult carrying the ProgressState
        """
        try:
            collections = {
                "workouts": self._workout_repo.get_list(user_id),
                "active_challenges": self._challenge_repo.get_active(user_id),
                "custom_climbing_templates": self._challenge_repo.get_custom_templates(
                    user_id, ChallengeKind.CLIMBING
                ),
                "custom_distance_templates": self._challenge_repo.get_custom_templates(
                    user_id, ChallengeKind.DISTANCE
                ),
                "unlocked_badges": self._achievement_repo.get_unlocked_badges(user_id),
                "trophies": self._achievement_repo.get_trophies(user_id),
            }
            unread = [name for name, items in collections.items() if items is None]
            if unread:
                logger.error(f"Loading progress for user {user_id} failed to read: {', '.join(unread)}")
                return LoadProgressResult(
                    success=False,
                    error=f"Could not read stored {', '.join(unread)}",
                    unread=unread,
                )

            state = ProgressState(
                user_id=user_id,
                profile=self._profile_repo.get(user_id) or UserProfile(),
                **collections,
            )
        except Exception as e:
            logger.exception(f"Loading progress failed for user {user_id}: {e}")
            return LoadProgressResult(success=False, error=str(e))

        sync = sync_trophies(state.active_challenges, state.trophies)
        if sync.changed:
            state.trophies = sync.trophies
            logger.info(
                f"Trophy reconciliation on load for user {user_id}: "
                f"{len(sync.awarded)} awarded, {len(sync.revoked)} revoked, "
                f"{len(sync.adopted)} adopted, {len(sync.deduplicated)} deduplicated"
            )
            persist_best_effort("trophies", self._achievement_repo.save_trophies, user_id, list(state.trophies))

        return LoadProgressResult(success=True, state=state, trophies_reconciled=sync.changed)

    def summarize(self, state: ProgressState, today: Optional[date] = None) -> ProgressSummary:
        """
        Compute lifetime totals, this week's progress and badge statuses.

        Args:
            state: Loaded progress snapshot
            today: Day whose week is reported (defaults to today)
        """
        rider_weight_kg = state.profile.rider_weight_kg(self._default_rider_weight_kg)
        return ProgressSummary(
            rider_weight_kg=rider_weight_kg,
            totals=compute_totals(state.workouts, rider_weight_kg),
            weekly=compute_weekly_progress(
                state.workouts,
                rider_weight_kg,
                state.profile.weekly_goal,
                today or date.today(),
            ),
            badges=badge_statuses(state.unlocked_badges),
            trophies=list(state.trophies),
            active_challenges=list(state.active_challenges),
        )
