"""
Dependency providers for the Summit API routers.

Repository providers are typed as the ports in ``application.ports`` so
tests can swap in the in-memory fakes:

    app.dependency_overrides[get_workout_repo] = lambda: FakeWorkoutRepository()

The Supabase client is cached per process. Repositories, use cases and the
user's ProgressState are built fresh for every request.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    AchievementRepository,
    ChallengeRepository,
    ProfileRepository,
    WorkoutRepository,
)

# Concrete implementations
from infrastructure import (
    SupabaseAchievementRepository,
    SupabaseChallengeRepository,
    SupabaseProfileRepository,
    SupabaseWorkoutRepository,
)

from application.use_cases import (
    DeleteWorkoutUseCase,
    EstimateEnergyUseCase,
    LoadProgressUseCase,
    LogWorkoutUseCase,
    ManageChallengesUseCase,
    UpdateWorkoutUseCase,
)
from backend.settings import Settings, get_settings as _get_settings
from domain.models import ProgressState

# Wrapped so tests can override a single provider
from backend.auth import get_current_user as _get_current_user


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Use this dependency when the endpoint requires database access.
    Raises HTTPException 503 if database is not available.

    Returns:
        Client: Supabase client instance

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_profile_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProfileRepository:
    """
    Get ProfileRepository implementation.

    Args:
        client: Supabase client (injected)

    Returns:
        ProfileRepository: Repository for user profiles
    """
    return SupabaseProfileRepository(client)


def get_workout_repo(
    client: Client = Depends(get_supabase_client_required),
) -> WorkoutRepository:
    """
    Get WorkoutRepository implementation.

    Returns a SupabaseWorkoutRepository instance with injected client.
    The return type is the Protocol to enable easy mocking.

    Args:
        client: Supabase client (injected)

    Returns:
        WorkoutRepository: Repository for workout persistence
    """
    return SupabaseWorkoutRepository(client)


def get_challenge_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ChallengeRepository:
    """
    Get ChallengeRepository implementation.

    Args:
        client: Supabase client (injected)

    Returns:
        ChallengeRepository: Repository for active instances and custom templates
    """
    return SupabaseChallengeRepository(client)


def get_achievement_repo(
    client: Client = Depends(get_supabase_client_required),
) -> AchievementRepository:
    """
    Get AchievementRepository implementation.

    Args:
        client: Supabase client (injected)

    Returns:
        AchievementRepository: Repository for unlocked badges and trophies
    """
    return SupabaseAchievementRepository(client)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_load_progress_use_case(
    profile_repo: ProfileRepository = Depends(get_profile_repo),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    challenge_repo: ChallengeRepository = Depends(get_challenge_repo),
    achievement_repo: AchievementRepository = Depends(get_achievement_repo),
    settings: Settings = Depends(get_settings),
) -> LoadProgressUseCase:
    return LoadProgressUseCase(
        profile_repo=profile_repo,
        workout_repo=workout_repo,
        challenge_repo=challenge_repo,
        achievement_repo=achievement_repo,
        default_rider_weight_kg=settings.default_rider_weight_kg,
    )


def get_log_workout_use_case(
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    achievement_repo: AchievementRepository = Depends(get_achievement_repo),
    settings: Settings = Depends(get_settings),
) -> LogWorkoutUseCase:
    return LogWorkoutUseCase(
        workout_repo=workout_repo,
        achievement_repo=achievement_repo,
        default_rider_weight_kg=settings.default_rider_weight_kg,
    )


def get_update_workout_use_case(
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    achievement_repo: AchievementRepository = Depends(get_achievement_repo),
    settings: Settings = Depends(get_settings),
) -> UpdateWorkoutUseCase:
    return UpdateWorkoutUseCase(
        workout_repo=workout_repo,
        achievement_repo=achievement_repo,
        default_rider_weight_kg=settings.default_rider_weight_kg,
    )


def get_delete_workout_use_case(
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    challenge_repo: ChallengeRepository = Depends(get_challenge_repo),
    achievement_repo: AchievementRepository = Depends(get_achievement_repo),
) -> DeleteWorkoutUseCase:
    return DeleteWorkoutUseCase(
        workout_repo=workout_repo,
        challenge_repo=challenge_repo,
        achievement_repo=achievement_repo,
    )


def get_manage_challenges_use_case(
    challenge_repo: ChallengeRepository = Depends(get_challenge_repo),
    achievement_repo: AchievementRepository = Depends(get_achievement_repo),
    settings: Settings = Depends(get_settings),
) -> ManageChallengesUseCase:
    return ManageChallengesUseCase(
        challenge_repo=challenge_repo,
        achievement_repo=achievement_repo,
        default_rider_weight_kg=settings.default_rider_weight_kg,
    )


def get_estimate_energy_use_case() -> EstimateEnergyUseCase:
    return EstimateEnergyUseCase()


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """
    Get the current authenticated user ID.

    Wraps backend.auth.get_current_user for dependency injection.
    Supports Supabase JWTs (HS256) and API keys.

    Args:
        authorization: Bearer token header
        x_api_key: API key header

    Returns:
        str: User ID from authentication

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(
        authorization=authorization,
        x_api_key=x_api_key,
    )


# =============================================================================
# State Provider
# =============================================================================


def get_progress_state(
    user_id: str = Depends(get_current_user),
    load_progress: LoadProgressUseCase = Depends(get_load_progress_use_case),
) -> ProgressState:
    """
    Load the authenticated user's ProgressState for this request.

    Raises:
        HTTPException: 503 if the state could not be loaded
    """
    result = load_progress.execute(user_id)
    if not result.success or result.state is None:
        raise HTTPException(status_code=503, detail=result.error or "Failed to load progress")
    return result.state


# =============================================================================
# Exports
# =============================================================================

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
    # Use cases
    "get_load_progress_use_case",
    "get_log_workout_use_case",
    "get_update_workout_use_case",
    "get_delete_workout_use_case",
    "get_manage_challenges_use_case",
    "get_estimate_energy_use_case",
    # Authentication
    "get_current_user",
    # State
    "get_progress_state",
]
