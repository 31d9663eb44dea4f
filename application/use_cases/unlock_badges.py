"""
Badge unlock step shared by the workout use cases.

Re-evaluates badges against the lifetime climbing total whenever the
workout history changes, then persists the unlocked set best-effort.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from application.ports import AchievementRepository
from application.use_cases.persistence import persist_best_effort
from backend.core.badge_evaluator import check_and_unlock, merge_unlocked
from backend.core.progress_aggregator import compute_totals
from domain.models import Badge, ProgressState

logger = logging.getLogger(__name__)


@dataclass
class BadgeUnlockResult:
    newly_unlocked: List[Badge] = field(default_factory=list)
    persisted: bool = True


def unlock_badges(
    state: ProgressState,
    rider_weight_kg: float,
    achievement_repo: AchievementRepository,
) -> BadgeUnlockResult:
    """
    Unlock every badge the lifetime total now reaches.

    Unlocks are applied to ``state`` before persistence is attempted and
    are kept even if the write fails.
    """
    totals = compute_totals(state.workouts, rider_weight_kg)
    newly_unlocked = check_and_unlock(totals.climbing_meters, state.unlocked_badges)
    if not newly_unlocked:
        return BadgeUnlockResult()

    state.unlocked_badges = merge_unlocked(state.unlocked_badges, newly_unlocked)
    logger.info(
        f"Unlocked badges for user {state.user_id}: {[b.id for b in newly_unlocked]} "
        f"at {totals.climbing_meters:.2f} m"
    )

    persisted = persist_best_effort(
        "unlocked badges",
        achievement_repo.save_unlocked_badges,
        state.user_id,
        list(state.unlocked_badges),
    )

    return BadgeUnlockResult(newly_unlocked=newly_unlocked, persisted=persisted)
