# tests/test_system.py
import pytest
from fastapi.testclient import TestClient

from church_admin.errors import first_error_message
from church_admin.main import app


def test_health_reports_db_probe(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["db"]["status"] == "ok"
    assert body["time"]["tz"]


def test_version(client):
    body = client.get("/version").json()
    assert body["app"] == "Church Worker Admin"
    assert "db_driver" in body


def test_unknown_route_uses_message_envelope(client):
    r = client.get("/no-such-route")
    assert r.status_code == 404
    assert r.json() == {"message": "Not Found"}


@pytest.mark.parametrize(
    "errors,expected",
    [
        ([{"msg": "Value error, Passwords do not match"}], "Passwords do not match"),
        ([{"msg": "Field required"}, {"msg": "other"}], "Field required"),
        ([], "Invalid request"),
    ],
)
def test_first_error_message(errors, expected):
    assert first_error_message(errors) == expected


def test_unhandled_error_returns_500_envelope(monkeypatch):
    from church_admin.services import churches

    def _boom(*args, **kwargs):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(churches, "list_churches", _boom)
    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/church")
    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error", "error": "kaboom"}
