"""
UpdateWorkout Use Case.

Applies field changes to an existing workout. Contribution amounts already
recorded against challenge instances are not recomputed: the contribution
history is a ledger of what was credited at the time.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from application.ports import AchievementRepository, WorkoutRepository
from application.use_cases.log_workout import DEFAULT_RIDER_WEIGHT_KG
from application.use_cases.persistence import persist_best_effort
from application.use_cases.unlock_badges import unlock_badges
from domain.models import Badge, ProgressState, Workout

logger = logging.getLogger(__name__)

# Identity fields are owned by the ledger, not by edits
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


@dataclass
class UpdateWorkoutResult:
    """Result of the UpdateWorkout use case execution."""

    success: bool
    workout: Optional[Workout] = None
    persisted: bool = False
    new_badges: List[Badge] = field(default_factory=list)
    not_found: bool = False
    error: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)


class UpdateWorkoutUseCase:
    """Use case for editing a logged workout."""

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        achievement_repo: AchievementRepository,
        default_rider_weight_kg: float = DEFAULT_RIDER_WEIGHT_KG,
    ) -> None:
        self._workout_repo = workout_repo
        self._achievement_repo = achievement_repo
        self._default_rider_weight_kg = default_rider_weight_kg

    def execute(
        self,
        state: ProgressState,
        workout_id: str,
        changes: Dict[str, Any],
    ) -> UpdateWorkoutResult:
        """
        Execute the update workout workflow.

        Args:
            state: The user's progress snapshot (mutated in place)
            workout_id: Id of the workout to edit
            changes: Workout fields to replace (``metric`` included)

        Returns:
            UpdateWorkoutResult with the edited workout
        """
        existing = state.find_workout(workout_id)
        if existing is None:
            return UpdateWorkoutResult(
                success=False,
                not_found=True,
                error=f"Workout {workout_id} not found",
            )

        unknown = sorted(set(changes) - set(Workout.model_fields))
        rejected = sorted(set(changes) & IMMUTABLE_FIELDS)
        if unknown or rejected:
            errors = [f"Unknown field: {name}" for name in unknown]
            errors += [f"Field cannot be changed: {name}" for name in rejected]
            return UpdateWorkoutResult(success=False, error="Invalid changes", validation_errors=errors)

        try:
            updated = Workout.model_validate({**existing.model_dump(), **changes})
        except ValidationError as e:
            logger.warning(f"Workout {workout_id} update rejected: {e.error_count()} validation errors")
            return UpdateWorkoutResult(
                success=False,
                error="Workout validation failed",
                validation_errors=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
            )

        state.replace_workout(updated)

        persisted = False
        error = None
        if updated.is_provisional:
            error = "Workout is not yet persisted"
        else:
            persisted = persist_best_effort(
                f"workout {workout_id}", self._workout_repo.update, state.user_id, updated
            )
            if not persisted:
                error = "Workout updated locally but not yet persisted"
            else:
                logger.info(f"Workout {workout_id} updated for user {state.user_id}")

        rider_weight_kg = state.profile.rider_weight_kg(self._default_rider_weight_kg)
        badges = unlock_badges(state, rider_weight_kg, self._achievement_repo)

        return UpdateWorkoutResult(
            success=True,
            workout=updated,
            persisted=persisted and badges.persisted,
            new_badges=badges.newly_unlocked,
            error=error,
        )
