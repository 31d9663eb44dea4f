"""
ProgressState - the per-user in-memory snapshot every use case operates on.

The persistence collaborator supplies the snapshot, use cases mutate it in
place, and the changed collections are written back best-effort. Nothing in
the engine reads ambient globals.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models.achievement import Trophy
from domain.models.challenge import ChallengeInstance, ChallengeKind, ChallengeTemplate
from domain.models.profile import UserProfile
from domain.models.workout import Workout


class ProgressState(BaseModel):
    """Snapshot of everything one user owns."""

    user_id: str
    profile: UserProfile = Field(default_factory=UserProfile)
    workouts: List[Workout] = Field(default_factory=list)
    active_challenges: List[ChallengeInstance] = Field(default_factory=list)
    custom_climbing_templates: List[ChallengeTemplate] = Field(default_factory=list)
    custom_distance_templates: List[ChallengeTemplate] = Field(default_factory=list)
    unlocked_badges: List[str] = Field(default_factory=list)
    trophies: List[Trophy] = Field(default_factory=list)

    # -------------------------------------------------------------------------
    # Workouts
    # -------------------------------------------------------------------------

    def find_workout(self, workout_id: str) -> Optional[Workout]:
        for workout in self.workouts:
            if workout.id == workout_id:
                return workout
        return None

    def replace_workout(self, workout: Workout) -> None:
        """Swap the stored workout that has the same id."""
        self.replace_workout_by_id(workout.id, workout)

    def remove_workout(self, workout_id: str) -> Optional[Workout]:
        for index, existing in enumerate(self.workouts):
            if existing.id == workout_id:
                return self.workouts.pop(index)
        return None

    def confirm_workout(self, provisional_id: str, persisted_id: str) -> Optional[Workout]:
        """
        Replace a provisional id with the id assigned by persistence.

        Contributions already recorded against the provisional id are
        re-pointed so the ledger keeps following the workout.

        Returns:
            The confirmed workout, or None if the provisional record is gone.
        """
        workout = self.find_workout(provisional_id)
        if workout is None:
            return None

        confirmed = workout.with_id(persisted_id)
        self.replace_workout_by_id(provisional_id, confirmed)

        for instance in self.active_challenges:
            if instance.has_contribution_from(provisional_id):
                instance.contributions = [
                    c.model_copy(update={"workout_id": persisted_id})
                    if c.workout_id == provisional_id
                    else c
                    for c in instance.contributions
                ]
        return confirmed

    def replace_workout_by_id(self, workout_id: str, workout: Workout) -> None:
        for index, existing in enumerate(self.workouts):
            if existing.id == workout_id:
                self.workouts[index] = workout
                return
        raise KeyError(workout_id)

    # -------------------------------------------------------------------------
    # Challenges
    # -------------------------------------------------------------------------

    def find_instance(self, instance_id: str) -> Optional[ChallengeInstance]:
        for instance in self.active_challenges:
            if instance.instance_id == instance_id:
                return instance
        return None

    def custom_templates(self, kind: Optional[ChallengeKind] = None) -> List[ChallengeTemplate]:
        if kind is ChallengeKind.CLIMBING:
            return list(self.custom_climbing_templates)
        if kind is ChallengeKind.DISTANCE:
            return list(self.custom_distance_templates)
        return [*self.custom_climbing_templates, *self.custom_distance_templates]
