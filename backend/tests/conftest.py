# tests/conftest.py
from __future__ import annotations

from typing import Any, Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from church_admin.db import Base, enable_sqlite_foreign_keys, get_db
from church_admin.main import app

# In-memory SQLite shared across threads (TestClient runs the app in a worker thread)
engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def _auth_env(monkeypatch):
    monkeypatch.setenv("AUTH_SECRET", "test-secret")
    monkeypatch.delenv("AUTH_ENFORCE", raising=False)
    monkeypatch.delenv("COOKIE_SECURE", raising=False)


@pytest.fixture()
def db() -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db: Session) -> Generator[TestClient, None, None]:
    def _get_test_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---- payload factories ----

def worker_payload(n: int = 1, **overrides: Any) -> Dict[str, Any]:
    body = {
        "email": f"worker{n}@church.local",
        "password": "secret-pass-1",
        "confirmPassword": "secret-pass-1",
        "firstname": f"Worker{n}",
        "lastname": "Santos",
        "birthday": "1990-05-17",
        "gender": "female",
        "status": "married",
    }
    body.update(overrides)
    return body


@pytest.fixture()
def make_church(client: TestClient) -> Callable[..., Dict[str, Any]]:
    def _make(**overrides: Any) -> Dict[str, Any]:
        body = {"address": "12 Rizal St., Malolos", "latitude": 14, "longitude": 120}
        body.update(overrides)
        r = client.post("/church", json=body)
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture()
def make_position(client: TestClient) -> Callable[..., Dict[str, Any]]:
    def _make(**overrides: Any) -> Dict[str, Any]:
        body = {"name": "Deacon", "description": "Assists in services"}
        body.update(overrides)
        r = client.post("/positions", json=body)
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture()
def make_subject(client: TestClient) -> Callable[..., Dict[str, Any]]:
    def _make(**overrides: Any) -> Dict[str, Any]:
        body = {"name": "Bible Study", "description": "Weekly scripture study"}
        body.update(overrides)
        r = client.post("/subjects", json=body)
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture()
def make_worker(client: TestClient) -> Callable[..., Dict[str, Any]]:
    counter = {"n": 0}

    def _make(**overrides: Any) -> Dict[str, Any]:
        counter["n"] += 1
        r = client.post("/users/workers", json=worker_payload(counter["n"], **overrides))
        assert r.status_code == 201, r.text
        return r.json()
    return _make
