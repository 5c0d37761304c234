# tests/test_app.py

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from taskmanager.core import database
from taskmanager.core.config import Settings
from taskmanager.core.events import NullPublisher, RabbitMQPublisher, create_publisher
from taskmanager.main import create_app

from .fakes import BrokenSigner, RecordingPublisher


def test_root(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"service": "task_manager", "version": "1.0.0", "status": "running"}


def test_health_reports_database(client: TestClient) -> None:
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"


def test_process_time_header(client: TestClient) -> None:
    assert "x-process-time" in client.get("/tasks").headers


def test_shutdown_closes_publisher(app, publisher: RecordingPublisher) -> None:
    with TestClient(app):
        assert not publisher.closed
    assert publisher.closed


def test_settings_overrides() -> None:
    settings = Settings(database_url="sqlite://", bcrypt_rounds=5)
    assert settings.database_url == "sqlite://"
    assert settings.bcrypt_rounds == 5
    assert Settings().algorithm == "HS256"


def test_settings_reject_unknown_names() -> None:
    with pytest.raises(AttributeError):
        Settings(no_such_setting=1)


def test_create_publisher_follows_settings() -> None:
    assert isinstance(create_publisher(Settings(events_enabled=False)), NullPublisher)

    publisher = create_publisher(Settings(events_enabled=True, events_exchange="tm"))
    assert isinstance(publisher, RabbitMQPublisher)
    assert publisher.exchange == "tm"


def test_init_db_retries_then_gives_up(tmp_path, monkeypatch) -> None:
    sleeps = []
    monkeypatch.setattr(database.time, "sleep", sleeps.append)
    engine = database.create_db_engine(f"sqlite:///{tmp_path}/missing/dir/tasks.db")

    with pytest.raises(OperationalError):
        database.init_db(engine, max_retries=3, delay=0.5)
    assert sleeps == [0.5, 0.5]


def test_check_db_connection(tmp_path) -> None:
    assert database.check_db_connection(database.create_db_engine("sqlite://"))
    assert not database.check_db_connection(
        database.create_db_engine(f"sqlite:///{tmp_path}/missing/dir/tasks.db")
    )


def _register_with_broken_signer(settings: Settings):
    app = create_app(settings, token_signer=BrokenSigner(), event_publisher=RecordingPublisher())
    with TestClient(app, raise_server_exceptions=False) as client:
        return client.post("/auth/register", json={"username": "alice", "password": "pw"})


def test_unexpected_error_is_generic_500(settings: Settings) -> None:
    resp = _register_with_broken_signer(settings)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_unexpected_error_shows_message_in_debug(settings: Settings) -> None:
    settings.debug = True
    resp = _register_with_broken_signer(settings)
    assert resp.status_code == 500
    assert resp.json() == {"error": "signing key unavailable"}


def test_root_and_health_are_not_request_logged(client: TestClient, caplog) -> None:
    caplog.set_level(logging.INFO, logger="taskmanager.main")

    client.get("/")
    client.get("/health")
    client.get("/tasks")

    messages = [r.getMessage() for r in caplog.records if r.name == "taskmanager.main"]
    assert any(m.startswith("GET /tasks - 200") for m in messages)
    assert not any(m.startswith("GET / ") or m.startswith("GET /health") for m in messages)
