"""
Infrastructure Layer for the Summit API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseAchievementRepository,
    SupabaseChallengeRepository,
    SupabaseProfileRepository,
    SupabaseWorkoutRepository,
)

__all__ = [
    "SupabaseProfileRepository",
    "SupabaseWorkoutRepository",
    "SupabaseChallengeRepository",
    "SupabaseAchievementRepository",
]
