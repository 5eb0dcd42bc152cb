"""
Pytest configuration and fixtures
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from playground.config import Settings
from playground.main import create_app


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing every directory into a per-test temporary tree"""
    static_dir = tmp_path / "static"
    return Settings(
        STATIC_DIR=str(static_dir),
        UPLOAD_DIR=str(static_dir / "upload"),
        SERVE_STATIC=False,
    )


@pytest.fixture
def upload_dir(test_settings):
    """Path of the upload directory used by the test application"""
    return Path(test_settings.UPLOAD_DIR)


@pytest.fixture
def client(test_settings):
    """FastAPI test client fixture"""
    return TestClient(create_app(test_settings))
