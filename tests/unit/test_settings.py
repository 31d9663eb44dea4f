"""
Unit tests for backend/settings.py
"""
import pytest
from pydantic import ValidationError

from backend.settings import Settings, get_settings

# Environment variables that CI might set which we need to clear for default tests
CI_ENV_VARS = [
    "ENVIRONMENT",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "SUPABASE_JWT_SECRET",
    "API_KEYS",
    "CORS_ALLOWED_ORIGINS",
    "DEFAULT_RIDER_WEIGHT_KG",
    "SENTRY_DSN",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear CI environment variables to test true defaults."""
    for var in CI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.mark.unit
class TestSettingsDefaults:
    def test_environment_default(self, clean_env):
        assert Settings(_env_file=None).environment == "development"

    def test_supabase_fields_default_to_none(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.supabase_url is None
        assert settings.supabase_key is None
        assert settings.supabase_jwt_secret is None

    def test_default_rider_weight(self, clean_env):
        assert Settings(_env_file=None).default_rider_weight_kg == 75.0

    def test_no_api_keys(self, clean_env):
        assert Settings(_env_file=None).api_keys_list == []


@pytest.mark.unit
class TestSettingsFromEnvironment:
    def test_service_role_key_preferred(self, clean_env, monkeypatch):
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service")
        assert Settings(_env_file=None).supabase_key == "service"

    def test_lists_parsed(self, clean_env, monkeypatch):
        monkeypatch.setenv("API_KEYS", "sk_one, sk_two,,")
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://summit.example.com , http://localhost:3000")
        settings = Settings(_env_file=None)
        assert settings.api_keys_list == ["sk_one", "sk_two"]
        assert settings.cors_origins_list == ["https://summit.example.com", "http://localhost:3000"]

    def test_rider_weight_override(self, clean_env, monkeypatch):
        monkeypatch.setenv("DEFAULT_RIDER_WEIGHT_KG", "68.5")
        assert Settings(_env_file=None).default_rider_weight_kg == 68.5


@pytest.mark.unit
class TestSettingsValidation:
    def test_environment_normalized(self):
        settings = Settings(environment="PRODUCTION", _env_file=None)
        assert settings.environment == "production"
        assert settings.is_production

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(environment="moon", _env_file=None)

    def test_rider_weight_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(default_rider_weight_kg=0, _env_file=None)


@pytest.mark.unit
class TestGetSettings:
    def test_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()
