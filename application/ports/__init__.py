"""
Repository Interfaces (Ports) for the Summit API.

This package defines abstract interfaces that decouple the engine and use
cases from infrastructure (database, external services). Implementations
are provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutRepository, ChallengeRepository

    class DeleteWorkoutUseCase:
        def __init__(self, workout_repo: WorkoutRepository, challenge_repo: ChallengeRepository):
            self._workout_repo = workout_repo
            self._challenge_repo = challenge_repo
"""

# Profile persistence
from application.ports.profile_repository import ProfileRepository

# Workout persistence
from application.ports.workout_repository import WorkoutRepository

# Challenge persistence
from application.ports.challenge_repository import (
    ChallengeCategory,
    ChallengeRepository,
)

# Badge and trophy persistence
from application.ports.achievement_repository import AchievementRepository

__all__ = [
    # Profile
    "ProfileRepository",
    # Workout
    "WorkoutRepository",
    # Challenges
    "ChallengeRepository",
    "ChallengeCategory",
    # Achievements
    "AchievementRepository",
]
