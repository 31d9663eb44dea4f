"""
Domain layer for the Summit API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    Badge,
    ChallengeInstance,
    ChallengeKind,
    ChallengeTemplate,
    Contribution,
    ProgressState,
    Trophy,
    UserProfile,
    Workout,
    WorkoutType,
)

__all__ = [
    "Badge",
    "ChallengeInstance",
    "ChallengeKind",
    "ChallengeTemplate",
    "Contribution",
    "ProgressState",
    "Trophy",
    "UserProfile",
    "Workout",
    "WorkoutType",
]
