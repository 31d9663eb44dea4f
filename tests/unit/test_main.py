"""
Unit tests for backend/main.py
"""
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.main import _init_sentry, create_app
from backend.settings import Settings


@pytest.mark.unit
class TestCreateApp:
    def test_returns_fastapi_instance(self):
        app = create_app(settings=Settings(environment="test", _env_file=None))
        assert isinstance(app, FastAPI)
        assert app.title == "Summit API"

    def test_uses_default_settings_when_none_provided(self):
        with patch("backend.main.get_settings") as mock_get_settings:
            mock_get_settings.return_value = Settings(environment="test", _env_file=None)
            app = create_app(settings=None)
            mock_get_settings.assert_called_once()
            assert isinstance(app, FastAPI)

    def test_routes_registered(self):
        app = create_app(settings=Settings(environment="test", _env_file=None))
        # Read from the OpenAPI document; app.routes may hold nested router entries without a path
        paths = set(app.openapi()["paths"])
        for path in (
            "/health",
            "/calculator/elevation",
            "/calculator/estimate",
            "/profile",
            "/workouts",
            "/workouts/{workout_id}",
            "/challenges/templates",
            "/challenges/active",
            "/challenges/active/{instance_id}/contributions",
            "/achievements/badges",
            "/achievements/trophies",
            "/progress",
        ):
            assert path in paths

    def test_health(self):
        client = TestClient(create_app(settings=Settings(environment="test", _env_file=None)))
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_cors_preflight(self):
        settings = Settings(environment="test", cors_allowed_origins="https://summit.example.com", _env_file=None)
        client = TestClient(create_app(settings=settings))
        response = client.options(
            "/health",
            headers={"Origin": "https://summit.example.com", "Access-Control-Request-Method": "GET"},
        )
        assert response.headers["access-control-allow-origin"] == "https://summit.example.com"


@pytest.mark.unit
class TestInitSentry:
    def test_skipped_when_no_dsn(self):
        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(Settings(environment="test", _env_file=None))
            mock_init.assert_not_called()

    def test_initialized_with_dsn(self):
        settings = Settings(environment="test", sentry_dsn="https://key@sentry.example.com/1", _env_file=None)
        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_called_once()
            assert mock_init.call_args.kwargs["environment"] == "test"
