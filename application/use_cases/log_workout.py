"""
LogWorkout Use Case.

Records a new workout with a two-phase commit:
1. Insert a provisional record (``tmp-`` id) into the in-memory state
2. Persist via the workout repository
3. On confirmation, swap the provisional id for the persisted one

The provisional record stays in state when persistence fails; the caller
reports the failure without rolling anything back.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from application.ports import AchievementRepository, WorkoutRepository
from application.use_cases.unlock_badges import unlock_badges
from backend.core.physics import ElevationResult, calculate_elevation
from domain.models import Badge, ProgressState, Workout

logger = logging.getLogger(__name__)

DEFAULT_RIDER_WEIGHT_KG = 75.0


@dataclass
class LogWorkoutResult:
    """Result of the LogWorkout use case execution."""

    success: bool
    workout: Optional[Workout] = None
    persisted: bool = False
    elevation: Optional[ElevationResult] = None
    new_badges: List[Badge] = field(default_factory=list)
    error: Optional[str] = None


class LogWorkoutUseCase:
    """
    Use case for logging a workout.

    Usage:
        >>> use_case = LogWorkoutUseCase(workout_repo, achievement_repo)
        >>> result = use_case.execute(state, workout)
        >>> result.workout.id  # persisted id, or tmp-... if the write failed
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        achievement_repo: AchievementRepository,
        default_rider_weight_kg: float = DEFAULT_RIDER_WEIGHT_KG,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            workout_repo: Repository for persisting workouts
            achievement_repo: Repository for persisting unlocked badges
            default_rider_weight_kg: Weight used when the profile has none
        """
        self._workout_repo = workout_repo
        self._achievement_repo = achievement_repo
        self._default_rider_weight_kg = default_rider_weight_kg

    def execute(self, state: ProgressState, workout: Workout) -> LogWorkoutResult:
        """
        Execute the log workout workflow.

        Args:
            state: The user's progress snapshot (mutated in place)
            workout: Workout to log; any id it carries is replaced

        Returns:
            LogWorkoutResult; ``persisted`` is False when the repository write failed
        """
        provisional = workout.provisional()
        state.workouts.insert(0, provisional)
        logger.info(f"Logging workout {provisional.id} for user {state.user_id}")

        persisted_id: Optional[str] = None
        try:
            persisted_id = self._workout_repo.add(state.user_id, provisional)
        except Exception as e:
            logger.error(f"Workout repository add failed for {provisional.id}: {e}")

        error = None
        current = provisional
        if persisted_id:
            current = state.confirm_workout(provisional.id, persisted_id) or provisional
            logger.info(f"Workout {provisional.id} confirmed as {persisted_id}")
        else:
            error = "Workout saved locally but not yet persisted"
            logger.warning(f"Workout {provisional.id} kept as provisional: persistence failed")

        rider_weight_kg = state.profile.rider_weight_kg(self._default_rider_weight_kg)
        elevation = None
        if current.energy_kj is not None:
            elevation = calculate_elevation(current.energy_kj, rider_weight_kg)

        badges = unlock_badges(state, rider_weight_kg, self._achievement_repo)

        return LogWorkoutResult(
            success=True,
            workout=current,
            persisted=bool(persisted_id) and badges.persisted,
            elevation=elevation,
            new_badges=badges.newly_unlocked,
            error=error,
        )
