"""
Shared pytest fixtures.

Provides fake repositories, an empty ProgressState, and a TestClient whose
repository, settings and auth dependencies are overridden with fakes.
"""
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from api import deps
from backend.main import create_app
from backend.settings import Settings
from domain.models import ProgressState, UserProfile
from tests.fakes import (
    FakeAchievementRepository,
    FakeChallengeRepository,
    FakeProfileRepository,
    FakeWorkoutRepository,
    TEST_USER_ID,
)


# =============================================================================
# Repositories and state
# =============================================================================


@pytest.fixture
def workout_repo() -> FakeWorkoutRepository:
    """Fresh fake workout repository."""
    return FakeWorkoutRepository()


@pytest.fixture
def profile_repo() -> FakeProfileRepository:
    """Fresh fake profile repository."""
    return FakeProfileRepository()


@pytest.fixture
def challenge_repo() -> FakeChallengeRepository:
    """Fresh fake challenge repository."""
    return FakeChallengeRepository()


@pytest.fixture
def achievement_repo() -> FakeAchievementRepository:
    """Fresh fake achievement repository."""
    return FakeAchievementRepository()


@pytest.fixture
def state() -> ProgressState:
    """Empty state for an 80 kg rider."""
    return ProgressState(user_id=TEST_USER_ID, profile=UserProfile(weight=80))


# =============================================================================
# API
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    return Settings(environment="test", _env_file=None)


@pytest.fixture
def fake_repos(
    workout_repo: FakeWorkoutRepository,
    profile_repo: FakeProfileRepository,
    challenge_repo: FakeChallengeRepository,
    achievement_repo: FakeAchievementRepository,
) -> Dict[str, Any]:
    """The fakes wired into ``api_client``, for seeding and inspection."""
    return {
        "workout_repo": workout_repo,
        "profile_repo": profile_repo,
        "challenge_repo": challenge_repo,
        "achievement_repo": achievement_repo,
    }


@pytest.fixture
def api_app(test_settings: Settings, fake_repos: Dict[str, Any]):
    """App with every repository, settings and auth dependency overridden."""
    app = create_app(settings=test_settings)
    app.dependency_overrides[deps.get_settings] = lambda: test_settings
    app.dependency_overrides[deps.get_current_user] = lambda: TEST_USER_ID
    app.dependency_overrides[deps.get_workout_repo] = lambda: fake_repos["workout_repo"]
    app.dependency_overrides[deps.get_profile_repo] = lambda: fake_repos["profile_repo"]
    app.dependency_overrides[deps.get_challenge_repo] = lambda: fake_repos["challenge_repo"]
    app.dependency_overrides[deps.get_achievement_repo] = lambda: fake_repos["achievement_repo"]
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(api_app) -> TestClient:
    """TestClient backed by the fake repositories."""
    return TestClient(api_app)
