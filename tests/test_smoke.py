"""Smoke tests for application startup and the health endpoint."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from law_proxy.config import Settings
from law_proxy.exceptions import ConfigurationError
from law_proxy.main import create_app


def test_health_endpoint(client):
    """Test health check endpoint."""
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["service"] == "law-search"
    assert data["api_configured"] is True
    assert "version" in data


def test_startup_fails_fast_without_oc():
    app = create_app(Settings(law_oc="", _env_file=None))
    with patch("law_proxy.main.setup_logging") as mock_setup:
        with pytest.raises(ConfigurationError):
            with TestClient(app):
                pass
    mock_setup.assert_called_once()


def test_startup_succeeds_with_oc(settings):
    app = create_app(settings)
    with patch("law_proxy.main.setup_logging"):
        with TestClient(app) as client:
            assert client.get("/health").json()["api_configured"] is True


def test_unknown_path_is_404(client):
    assert client.get("/nope").status_code == 404
