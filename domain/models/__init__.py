"""
Domain models for the Summit API.

These models represent the core business concepts:
- Workout: A logged session with exactly one primary metric (energy or distance)
- ChallengeTemplate: A reusable climbing or distance goal
- ChallengeInstance: One activation of a template and its contribution ledger
- Trophy: Permanent record of a completed challenge instance
- Badge: Lifetime elevation milestone
- UserProfile: Rider weight, demographics and display preferences
- ProgressState: Per-user snapshot the use cases operate on

Usage:
    >>> from datetime import date
    >>> from domain.models import Workout, EnergyMetric

    >>> workout = Workout(date=date(2024, 5, 1), type="bike", metric=EnergyMetric(kj=400))
    >>> workout.is_energy_based
    True

    >>> # Serialize to JSON
    >>> json_str = workout.model_dump_json(indent=2)

    >>> # Deserialize from JSON
    >>> workout = Workout.model_validate_json(json_str)
"""

from domain.models.achievement import Badge, Trophy
from domain.models.challenge import (
    COMPLETION_EPSILON,
    ChallengeInstance,
    ChallengeKind,
    ChallengeTemplate,
    Contribution,
)
from domain.models.profile import UserProfile
from domain.models.state import ProgressState
from domain.models.workout import (
    PROVISIONAL_ID_PREFIX,
    DistanceMetric,
    EnergyMetric,
    Workout,
    WorkoutMetric,
    WorkoutType,
)

__all__ = [
    # Main entities
    "Workout",
    "ChallengeTemplate",
    "ChallengeInstance",
    "Contribution",
    "Trophy",
    "Badge",
    "UserProfile",
    "ProgressState",
    # Metrics
    "EnergyMetric",
    "DistanceMetric",
    "WorkoutMetric",
    # Enums
    "WorkoutType",
    "ChallengeKind",
    # Constants
    "COMPLETION_EPSILON",
    "PROVISIONAL_ID_PREFIX",
]
