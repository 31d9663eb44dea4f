"""
Challenge Engine.

Manages challenge instances and their contribution ledger, detects
completion, and reconciles the trophy list against current completion state.

Instance states:
- active-incomplete: progress < target - COMPLETION_EPSILON (initial state)
- active-complete: progress >= target - COMPLETION_EPSILON

Progress can move both ways (workout deletion reverses contributions), so
trophies are never awarded or removed inline. Every caller runs
``sync_trophies`` after a progress-affecting mutation and on load instead.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import List, Optional, Sequence

from domain.models.achievement import Trophy
from domain.models.challenge import (
    ChallengeInstance,
    ChallengeKind,
    ChallengeTemplate,
    Contribution,
)
from domain.models.workout import Workout
from backend.core.physics import calculate_elevation

logger = logging.getLogger(__name__)


# =============================================================================
# Instances and contributions
# =============================================================================


def activate_challenge(template: ChallengeTemplate, now: Optional[datetime] = None) -> ChallengeInstance:
    """Start a fresh attempt at ``template`` with zero progress."""
    return ChallengeInstance(
        template_id=template.id,
        title=template.title,
        kind=template.kind,
        target=template.target,
        activated_at=now or datetime.now(timezone.utc),
    )


def contribution_amount(instance: ChallengeInstance, workout: Workout, rider_weight_kg: float) -> float:
    """
    Amount a workout would credit toward ``instance``.

    Climbing instances take elevation meters from energy workouts; distance
    instances take kilometers from distance workouts. A workout whose
    primary metric does not match the instance kind credits nothing.
    """
    if instance.kind is ChallengeKind.CLIMBING:
        if workout.energy_kj is None:
            return 0.0
        return calculate_elevation(workout.energy_kj, rider_weight_kg).meters

    if workout.distance_km is None:
        return 0.0
    return workout.distance_km


def add_contribution(
    instance: ChallengeInstance,
    workout_id: str,
    amount: float,
    applied_at: Optional[datetime] = None,
) -> Contribution:
    """
    Append a contribution; progress rises by ``amount``.

    Raises:
        ValueError: if amount is negative
    """
    if amount < 0:
        raise ValueError(f"Contribution amount must be non-negative, got {amount}")

    contribution = Contribution(
        workout_id=workout_id,
        amount=amount,
        applied_at=applied_at or datetime.now(timezone.utc),
    )
    instance.contributions.append(contribution)
    return contribution


def reverse_contributions(instance: ChallengeInstance, workout_id: str) -> int:
    """
    Remove every contribution credited from ``workout_id``.

    Returns:
        Number of contribution records removed (0 if none)
    """
    kept = [c for c in instance.contributions if c.workout_id != workout_id]
    removed = len(instance.contributions) - len(kept)
    if removed:
        instance.contributions = kept
    return removed


def is_complete(instance: ChallengeInstance) -> bool:
    """True once progress reaches target within COMPLETION_EPSILON."""
    return instance.is_complete


# =============================================================================
# Trophy matching
# =============================================================================


class MatchTier(IntEnum):
    """How a trophy was matched to an instance, strongest first."""

    INSTANCE_ID = 1
    TEMPLATE_ID = 2
    # Fragile: two instances with the same title collide
    TITLE = 3


@dataclass
class TrophyMatch:
    trophy: Trophy
    tier: MatchTier


def find_trophy_for_instance(
    instance: ChallengeInstance,
    trophies: Sequence[Trophy],
) -> Optional[TrophyMatch]:
    """
    Find the trophy belonging to ``instance``, trying each tier in order.

    1. A trophy carrying the instance's id.
    2. A legacy trophy (no instance id) carrying the instance's template id.
    3. A legacy trophy with neither id whose title equals the instance title.

    Tiers 2 and 3 exist for trophies written before instances had ids.

    Returns:
        The first match, or None
    """
    for trophy in trophies:
        if trophy.instance_id == instance.instance_id:
            return TrophyMatch(trophy, MatchTier.INSTANCE_ID)

    for trophy in trophies:
        if trophy.instance_id is None and trophy.template_id == instance.template_id:
            return TrophyMatch(trophy, MatchTier.TEMPLATE_ID)

    for trophy in trophies:
        if trophy.instance_id is None and trophy.template_id is None and trophy.title == instance.title:
            return TrophyMatch(trophy, MatchTier.TITLE)

    return None


# =============================================================================
# Trophy synchronization
# =============================================================================


@dataclass
class TrophySyncResult:
    """Outcome of one reconciliation pass."""

    trophies: List[Trophy]
    awarded: List[Trophy] = field(default_factory=list)
    revoked: List[Trophy] = field(default_factory=list)
    adopted: List[Trophy] = field(default_factory=list)
    deduplicated: List[Trophy] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.awarded or self.revoked or self.adopted or self.deduplicated)


def sync_trophies(
    instances: Sequence[ChallengeInstance],
    trophies: Sequence[Trophy],
    now: Optional[datetime] = None,
) -> TrophySyncResult:
    """
    Reconcile trophies with the current completion state of active instances.

    1. Each complete instance ends with exactly one trophy keyed by its
       instance id. Legacy trophies are adopted by back-filling their ids,
       extra copies are dropped (earliest kept), otherwise one is awarded.
    2. Trophies keyed to an active but incomplete instance are removed.
    3. Trophies keyed to no active instance are kept as history.

    Idempotent: a second call on the returned trophies changes nothing.

    Args:
        instances: Currently active challenge instances
        trophies: Current trophy list (not mutated)
        now: Timestamp for newly awarded trophies

    Returns:
        TrophySyncResult with the reconciled list and what changed
    """
    now = now or datetime.now(timezone.utc)
    working: List[Trophy] = list(trophies)
    result = TrophySyncResult(trophies=working)

    complete_ids = {i.instance_id for i in instances if is_complete(i)}
    incomplete_ids = {i.instance_id for i in instances if not is_complete(i)}

    # Pass 1: award, adopt or deduplicate for complete instances
    for instance in instances:
        if instance.instance_id not in complete_ids:
            continue

        exact = [t for t in working if t.instance_id == instance.instance_id]
        if exact:
            keep = min(exact, key=lambda t: t.earned_at)
            for duplicate in exact:
                if duplicate is not keep:
                    working.remove(duplicate)
                    result.deduplicated.append(duplicate)
            continue

        match = find_trophy_for_instance(instance, working)
        if match is not None:
            adopted = match.trophy.model_copy(
                update={
                    "instance_id": instance.instance_id,
                    "template_id": instance.template_id,
                    "kind": match.trophy.kind or instance.kind,
                }
            )
            working[working.index(match.trophy)] = adopted
            result.adopted.append(adopted)
            logger.info(
                f"Adopted legacy trophy '{adopted.title}' for instance {instance.instance_id} "
                f"(matched by {match.tier.name.lower()})"
            )
            continue

        trophy = Trophy(
            instance_id=instance.instance_id,
            template_id=instance.template_id,
            title=instance.title,
            kind=instance.kind,
            earned_at=now,
        )
        working.append(trophy)
        result.awarded.append(trophy)

    # Pass 2: revoke trophies of instances that regressed
    for trophy in list(working):
        if trophy.instance_id is not None and trophy.instance_id in incomplete_ids:
            working.remove(trophy)
            result.revoked.append(trophy)

    return result

