"""
ManageChallenges Use Case.

Challenge lifecycle for one user:
- list built-in and custom templates
- create custom templates
- activate a template (fresh instance, zero progress)
- contribute selected workouts to an instance
- remove an instance (its trophy, if any, stays as history)
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from pydantic import ValidationError

from application.ports import AchievementRepository, ChallengeRepository
from application.use_cases.log_workout import DEFAULT_RIDER_WEIGHT_KG
from application.use_cases.persistence import persist_best_effort
from backend.core.catalog import builtin_templates, lookup_template
from backend.core.challenge_engine import (
    activate_challenge,
    add_contribution,
    contribution_amount,
    sync_trophies,
)
from domain.models import ChallengeInstance, ChallengeKind, ChallengeTemplate, ProgressState, Trophy

logger = logging.getLogger(__name__)


@dataclass
class CreateTemplateResult:
    """Result of creating a custom template."""
    success: bool
    template: Optional[ChallengeTemplate] = None
    persisted: bool = False
    error: Optional[str] = None


@dataclass
class ActivateChallengeResult:
    """Result of activating a template."""
    success: bool
    instance: Optional[ChallengeInstance] = None
    persisted: bool = False
    not_found: bool = False
    error: Optional[str] = None


@dataclass
class ContributeResult:
    """Result of contributing workouts to an instance."""
    success: bool
    instance: Optional[ChallengeInstance] = None
    applied: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    awarded: List[Trophy] = field(default_factory=list)
    persisted: bool = False
    not_found: bool = False
    error: Optional[str] = None


@dataclass
class RemoveChallengeResult:
    """Result of removing an instance."""
    success: bool
    instance: Optional[ChallengeInstance] = None
    persisted: bool = False
    not_found: bool = False
    error: Optional[str] = None


class ManageChallengesUseCase:
    """
    Use case for the challenge lifecycle.

    Every operation mutates ``state`` first and then writes the affected
    lists best-effort; a failed write is reported via ``persisted=False``.
    """

    def __init__(
        self,
        challenge_repo: ChallengeRepository,
        achievement_repo: AchievementRepository,
        default_rider_weight_kg: float = DEFAULT_RIDER_WEIGHT_KG,
    ) -> None:
        """
        Initialize with required dependencies.

        Args:
            challenge_repo: Repository for challenge lists
            achievement_repo: Repository for trophies
            default_rider_weight_kg: Weight used when the profile has none
        """
        self._challenge_repo = challenge_repo
        self._achievement_repo = achievement_repo
        self._default_rider_weight_kg = default_rider_weight_kg

    # -------------------------------------------------------------------------
    # Templates
    # -------------------------------------------------------------------------

    def list_templates(
        self,
        state: ProgressState,
        kind: Optional[ChallengeKind] = None,
    ) -> List[ChallengeTemplate]:
        """Built-in templates followed by the user's custom ones."""
        return [*builtin_templates(kind), *state.custom_templates(kind)]

    def find_template(self, state: ProgressState, template_id: str) -> Optional[ChallengeTemplate]:
        """Built-in template first, then the user's custom ones."""
        builtin = lookup_template(template_id)
        if builtin is not None:
            return builtin
        return next((t for t in state.custom_templates() if t.id == template_id), None)

    def create_template(
        self,
        state: ProgressState,
        title: str,
        kind: ChallengeKind,
        target: float,
    ) -> CreateTemplateResult:
        """
        Create a custom template and persist the list for its kind.

        Args:
            state: The user's progress snapshot (mutated in place)
            title: Display title
            kind: Climbing (target in meters) or distance (target in km)
            target: Goal amount, must be positive
        """
        try:
            template = ChallengeTemplate(
                id=f"custom-{uuid.uuid4().hex[:12]}",
                title=title.strip(),
                kind=kind,
                target=target,
                is_custom=True,
            )
        except ValidationError as e:
            return CreateTemplateResult(success=False, error=f"Invalid template: {e.error_count()} error(s)")

        if kind is ChallengeKind.CLIMBING:
            state.custom_climbing_templates.append(template)
        else:
            state.custom_distance_templates.append(template)

        persisted = persist_best_effort(
            "custom templates",
            self._challenge_repo.save_custom_templates,
            state.user_id,
            kind,
            state.custom_templates(kind),
        )
        logger.info(f"Created custom {kind.value} template {template.id} for user {state.user_id}")
        return CreateTemplateResult(success=True, template=template, persisted=persisted)

    # -------------------------------------------------------------------------
    # Instances
    # -------------------------------------------------------------------------

    def activate(self, state: ProgressState, template_id: str) -> ActivateChallengeResult:
        """Start a fresh instance of a template."""
        template = self.find_template(state, template_id)
        if template is None:
            return ActivateChallengeResult(
                success=False,
                not_found=True,
                error=f"Challenge template {template_id} not found",
            )

        instance = activate_challenge(template)
        state.active_challenges.append(instance)
        logger.info(f"Activated {template.id} as instance {instance.instance_id} for user {state.user_id}")

        persisted = self._save_active(state)
        return ActivateChallengeResult(success=True, instance=instance, persisted=persisted)

    def contribute(
        self,
        state: ProgressState,
        instance_id: str,
        workout_ids: Sequence[str],
    ) -> ContributeResult:
        """
        Credit selected workouts to an instance, then reconcile trophies.

        A workout is skipped when it is unknown, already credited to this
        instance, or has no metric matching the instance kind.
        """
        instance = state.find_instance(instance_id)
        if instance is None:
            return ContributeResult(
                success=False,
                not_found=True,
                error=f"Challenge instance {instance_id} not found",
            )

        rider_weight_kg = state.profile.rider_weight_kg(self._default_rider_weight_kg)
        applied: List[str] = []
        skipped: List[str] = []

        for workout_id in workout_ids:
            workout = state.find_workout(workout_id)
            if workout is None or instance.has_contribution_from(workout_id):
                skipped.append(workout_id)
                continue
            amount = contribution_amount(instance, workout, rider_weight_kg)
            if amount <= 0:
                skipped.append(workout_id)
                continue
            add_contribution(instance, workout_id, amount)
            applied.append(workout_id)

        if skipped:
            logger.info(f"Skipped {len(skipped)} workout(s) for instance {instance_id}: {skipped}")

        awarded: List[Trophy] = []
        persisted = True
        if applied:
            sync = sync_trophies(state.active_challenges, state.trophies)
            state.trophies = sync.trophies
            awarded = sync.awarded
            persisted = self._save_active(state)
            if sync.changed:
                persisted = persist_best_effort(
                    "trophies", self._achievement_repo.save_trophies, state.user_id, list(state.trophies)
                ) and persisted

        return ContributeResult(
            success=True,
            instance=instance,
            applied=applied,
            skipped=skipped,
            awarded=awarded,
            persisted=persisted,
        )

    def remove(self, state: ProgressState, instance_id: str) -> RemoveChallengeResult:
        """Drop an instance and its contributions; trophies are retained."""
        instance = state.find_instance(instance_id)
        if instance is None:
            return RemoveChallengeResult(
                success=False,
                not_found=True,
                error=f"Challenge instance {instance_id} not found",
            )

        state.active_challenges = [i for i in state.active_challenges if i.instance_id != instance_id]
        logger.info(f"Removed challenge instance {instance_id} for user {state.user_id}")

        persisted = self._save_active(state)
        return RemoveChallengeResult(success=True, instance=instance, persisted=persisted)

    # -------------------------------------------------------------------------
    # Persistence helpers
    # -------------------------------------------------------------------------

    def _save_active(self, state: ProgressState) -> bool:
        return persist_best_effort(
            "active challenges",
            self._challenge_repo.save_active,
            state.user_id,
            list(state.active_challenges),
        )
