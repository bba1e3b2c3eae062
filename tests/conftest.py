"""Shared fixtures for the diff backend tests."""

import pytest

from services.config_manager import CONFIG_DIR_ENV, ConfigManager


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the ConfigManager singleton at a throwaway directory."""
    monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))
    ConfigManager.reset_instance()
    yield tmp_path
    ConfigManager.reset_instance()


@pytest.fixture
def client(config_dir):
    from fastapi.testclient import TestClient

    from main import app

    with TestClient(app) as test_client:
        yield test_client
