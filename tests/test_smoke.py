"""Smoke tests for FastAPI application endpoints.

This module uses pytest's monkeypatch fixture to mock settings values,
avoiding dependencies on specific configuration files or environment variables.
"""
from fastapi.testclient import TestClient

from image_gateway import main
from image_gateway.main import app
from image_gateway.storage import InMemoryBlobStorage


def test_health_endpoint(monkeypatch):
    """Test health endpoint with mocked settings."""
    monkeypatch.setattr(main.settings, "environment", "test")
    monkeypatch.setattr(main.settings, "app_version", "1.0.0")

    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "environment": "test",
        "version": "1.0.0",
    }


def test_config_endpoint(monkeypatch):
    """Test config endpoint with mocked settings."""
    monkeypatch.setattr(main.settings, "app_name", "Test App")
    monkeypatch.setattr(main.settings, "app_version", "2.0.0")
    monkeypatch.setattr(main.settings, "environment", "test")
    monkeypatch.setattr(main.settings, "debug", True)
    monkeypatch.setattr(main.settings, "storage_type", "memory")
    monkeypatch.setattr(main.settings, "azure_storage_container_name", "photos")
    monkeypatch.setattr(main.settings, "azure_storage_connection_string", "AccountKey=secret")
    monkeypatch.setattr(main.settings, "log_level", "DEBUG")
    monkeypatch.setattr(main.settings, "log_json", True)
    monkeypatch.setattr(main.settings, "max_upload_size", 20 * 1024 * 1024)  # 20MB

    client = TestClient(app)
    response = client.get("/config")
    assert response.status_code == 200
    assert response.json() == {
        "app_name": "Test App",
        "app_version": "2.0.0",
        "environment": "test",
        "debug": True,
        "storage_type": "memory",
        "container_name": "photos",
        "log_level": "DEBUG",
        "log_json": True,
        "max_upload_size": 20 * 1024 * 1024,
    }
    # Credentials never leave the process
    assert "secret" not in response.text


def test_lifespan_creates_and_releases_storage(monkeypatch):
    """Test that startup builds the configured storage and shutdown drops it."""
    monkeypatch.setattr(main.settings, "storage_type", "memory")

    with TestClient(app) as client:
        assert isinstance(app.state.storage, InMemoryBlobStorage)
        response = client.get("/api/images")
        assert response.status_code == 200
        assert response.json() == []

    assert app.state.storage is None


def test_storage_dependency_requires_startup():
    """Test that routes fail loudly when used without the application lifespan."""
    app.state.storage = None
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/images")
    assert response.status_code == 500
