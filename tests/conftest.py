# tests/conftest.py

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskmanager.core.config import Settings
from taskmanager.main import create_app

from .fakes import RecordingPublisher


@pytest.fixture()
def settings() -> Settings:
    """
    Settings pointing at a private in-memory SQLite database.

    bcrypt runs at its minimum cost so the HTTP tests stay fast while still
    exercising the real hasher.
    """
    return Settings(
        database_url="sqlite://",
        bcrypt_rounds=4,
        db_init_retries=1,
        db_init_delay=0,
        events_enabled=False,
        secret_key="test-secret",
        access_token_expire_minutes=5,
    )


@pytest.fixture()
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture()
def app(settings: Settings, publisher: RecordingPublisher) -> FastAPI:
    return create_app(settings, event_publisher=publisher)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    # Entering the client runs the lifespan, which creates the tables.
    with TestClient(app) as test_client:
        yield test_client
