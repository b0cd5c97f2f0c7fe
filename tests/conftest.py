"""
tests/conftest.py
"""
import os

# Settings are read once at import time, so configure the environment first
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_SCHEMA"] = "app"
os.environ["UPLOAD_PASSWORD"] = "test-upload-password"
os.environ["UPDATE_REQUIRES_PASSWORD"] = "true"

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from app.db.session import create_db_and_tables, executor
from app.main import app

UPLOAD_PASSWORD = "test-upload-password"


@pytest.fixture(scope="session", autouse=True)
def _create_tables() -> None:
    create_db_and_tables()


@pytest.fixture(autouse=True)
def _empty_blogs() -> Generator[None, None, None]:
    """Every test starts and ends with an empty blogs table."""
    executor.execute("DELETE FROM app.blogs")
    yield
    executor.execute("DELETE FROM app.blogs")
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as client:
        yield client


@pytest.fixture
def create_post(client):
    """POST helper - returns the created item."""
    def _create(**fields):
        payload = {"upload_password": UPLOAD_PASSWORD, **fields}
        resp = client.post("/blogs/", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()["item"]
    return _create
