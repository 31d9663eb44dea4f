"""
Badge Evaluator.

Lifetime elevation milestones. Unlocks are one-time and permanent: a badge
id never leaves the unlocked set, whatever later edits or deletions do to
the cumulative total.
"""
from dataclasses import dataclass
from typing import Iterable, List

from domain.models.achievement import Badge
from backend.core.catalog import badge_catalog


@dataclass
class BadgeStatus:
    badge: Badge
    unlocked: bool


def check_and_unlock(cumulative_climbing_m: float, already_unlocked: Iterable[str]) -> List[Badge]:
    """
    Badges newly earned by a lifetime climbing total.

    Pass the ProgressAggregator lifetime total, not a single workout's
    height, so progress across sessions is counted.

    Args:
        cumulative_climbing_m: Lifetime meters climbed
        already_unlocked: Ids of badges unlocked earlier

    Returns:
        Newly unlocked badges in ascending threshold order
    """
    unlocked = set(already_unlocked)
    return [
        badge
        for badge in badge_catalog()
        if badge.id not in unlocked and badge.threshold <= cumulative_climbing_m
    ]


def merge_unlocked(already_unlocked: Iterable[str], newly_unlocked: Iterable[Badge]) -> List[str]:
    """Append newly unlocked ids, preserving existing order and never dropping one."""
    merged = list(already_unlocked)
    for badge in newly_unlocked:
        if badge.id not in merged:
            merged.append(badge.id)
    return merged


def badge_statuses(unlocked: Iterable[str]) -> List[BadgeStatus]:
    """Every catalog badge with its unlock flag."""
    unlocked_ids = set(unlocked)
    return [BadgeStatus(badge=b, unlocked=b.id in unlocked_ids) for b in badge_catalog()]
