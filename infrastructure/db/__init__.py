"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into use cases
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseProfileRepository,
        SupabaseWorkoutRepository,
        SupabaseChallengeRepository,
        SupabaseAchievementRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    profile_repo = SupabaseProfileRepository(client)
    workout_repo = SupabaseWorkoutRepository(client)
    challenge_repo = SupabaseChallengeRepository(client)
    achievement_repo = SupabaseAchievementRepository(client)
"""

from infrastructure.db.profile_repository import SupabaseProfileRepository
from infrastructure.db.workout_repository import SupabaseWorkoutRepository
from infrastructure.db.app_data_repository import (
    SupabaseAchievementRepository,
    SupabaseChallengeRepository,
)

__all__ = [
    # Profile persistence
    "SupabaseProfileRepository",

    # Workout persistence
    "SupabaseWorkoutRepository",

    # app_data documents
    "SupabaseChallengeRepository",
    "SupabaseAchievementRepository",
]
