"""
API package for the Summit API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_profile_repo,
    get_workout_repo,
    get_challenge_repo,
    get_achievement_repo,
    get_current_user,
    get_progress_state,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_profile_repo",
    "get_workout_repo",
    "get_challenge_repo",
    "get_achievement_repo",
    # Authentication
    "get_current_user",
    # State
    "get_progress_state",
]
