"""
Application Use Cases for the Summit API.

This package contains application-level use cases that orchestrate the
computation engine and coordinate between repository ports. Every use case
operates on an explicit ProgressState instead of shared globals.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return result dataclasses, not API responses

Usage:
    from application.use_cases import LoadProgressUseCase, LogWorkoutUseCase

    loaded = LoadProgressUseCase(
        profile_repo=profile_repo,
        workout_repo=workout_repo,
        challenge_repo=challenge_repo,
        achievement_repo=achievement_repo,
    ).execute("user-123")

    result = LogWorkoutUseCase(workout_repo, achievement_repo).execute(
        loaded.state,
        workout,
    )
"""

from application.use_cases.delete_workout import DeleteWorkoutResult, DeleteWorkoutUseCase
from application.use_cases.estimate_energy import EstimateEnergyUseCase
from application.use_cases.load_progress import (
    LoadProgressResult,
    LoadProgressUseCase,
    ProgressSummary,
)
from application.use_cases.log_workout import (
    DEFAULT_RIDER_WEIGHT_KG,
    LogWorkoutResult,
    LogWorkoutUseCase,
)
from application.use_cases.manage_challenges import (
    ActivateChallengeResult,
    ContributeResult,
    CreateTemplateResult,
    ManageChallengesUseCase,
    RemoveChallengeResult,
)
from application.use_cases.update_workout import UpdateWorkoutResult, UpdateWorkoutUseCase

__all__ = [
    # WorkoutLedger
    "LogWorkoutUseCase",
    "LogWorkoutResult",
    "UpdateWorkoutUseCase",
    "UpdateWorkoutResult",
    "DeleteWorkoutUseCase",
    "DeleteWorkoutResult",
    # Challenges
    "ManageChallengesUseCase",
    "CreateTemplateResult",
    "ActivateChallengeResult",
    "ContributeResult",
    "RemoveChallengeResult",
    # Progress
    "LoadProgressUseCase",
    "LoadProgressResult",
    "ProgressSummary",
    # Estimation
    "EstimateEnergyUseCase",
    # Defaults
    "DEFAULT_RIDER_WEIGHT_KG",
]
