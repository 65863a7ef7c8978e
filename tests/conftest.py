"""Pytest configuration and fixtures."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from users_api.config import Settings
from users_api.main import create_app


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as fast, in-process unit tests")


@pytest.fixture
def settings() -> Settings:
    """Settings for a seeded development app."""
    return Settings(environment="test", seed_demo_users=True, docs_enabled=True)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Create a fresh application with its own store."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a FastAPI test client."""
    return TestClient(app)
