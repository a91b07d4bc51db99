# tests/test_positions.py
from datetime import datetime

from sqlalchemy import update

from church_admin.models.position import Position


def test_empty_description_is_rejected(client):
    r = client.post("/positions", json={"name": "Pastor", "description": ""})
    assert r.status_code == 400
    assert r.json()["message"] == "Description is required"

    r = client.post("/positions", json={"name": "Pastor"})
    assert r.status_code == 400
    assert r.json()["message"] == "Description is required"


def test_create_then_get_round_trip(client):
    r = client.post("/positions", json={"name": "Pastor", "description": "Leads the flock"})
    assert r.status_code == 201, r.text
    created = r.json()

    got = client.get(f"/positions/{created['id']}").json()
    assert got["name"] == "Pastor"
    assert got["description"] == "Leads the flock"
    assert got["users"] == []


def test_update_position(client, make_position):
    pos = make_position()
    r = client.put(f"/positions/{pos['id']}", json={"description": "Serves at the altar"})
    assert r.status_code == 200, r.text
    assert r.json()["description"] == "Serves at the altar"
    assert r.json()["name"] == pos["name"]

    r = client.put(f"/positions/{pos['id']}", json={"description": "   "})
    assert r.status_code == 400
    assert r.json()["message"] == "Description is required"


def test_delete_is_blocked_while_workers_hold_the_position(client, make_position, make_worker):
    pos = make_position()
    worker = make_worker(positionId=pos["id"])

    r = client.delete(f"/positions/{pos['id']}")
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot delete position with associated users"
    assert client.get(f"/positions/{pos['id']}").status_code == 200

    r = client.put(f"/users/workers/{worker['id']}", json={"positionId": None})
    assert r.status_code == 200, r.text

    r = client.delete(f"/positions/{pos['id']}")
    assert r.status_code == 200
    assert r.json()["message"] == "Position deleted successfully"
    assert client.get(f"/positions/{pos['id']}").status_code == 404


def test_include_users_toggle(client, make_position, make_worker):
    pos = make_position()
    make_worker(positionId=pos["id"])

    plain = client.get("/positions").json()["data"][0]
    assert plain["users"] is None

    rich = client.get("/positions", params={"includeUsers": "true"}).json()["data"][0]
    assert len(rich["users"]) == 1
    assert rich["users"][0]["email"] == "worker1@church.local"
    assert "password" not in rich["users"][0]


def test_filter_by_name(client, make_position):
    make_position(name="Pastor", description="a")
    make_position(name="Youth Pastor", description="b")
    make_position(name="Treasurer", description="c")

    r = client.get("/positions", params={"name": "pastor"})
    assert r.json()["total"] == 2


def test_filter_by_created_at_range(client, db, make_position):
    first = make_position(name="Usher", description="a")
    second = make_position(name="Lector", description="b")
    for pos, when in ((first, datetime(2024, 2, 1)), (second, datetime(2024, 3, 1))):
        db.execute(update(Position).where(Position.id == pos["id"]).values(created_at=when))
    db.commit()

    def names(**params):
        r = client.get("/positions", params=params)
        assert r.status_code == 200, r.text
        return [p["name"] for p in r.json()["data"]]

    assert names(createdAtFrom="2024-02-15T00:00:00") == ["Lector"]
    assert names(createdAtTo="2024-02-15T00:00:00") == ["Usher"]
    assert names(createdAtFrom="2024-02-01T00:00:00", createdAtTo="2024-03-01T00:00:00", sort="name:asc") == ["Lector", "Usher"]
    assert names(createdAtFrom="2024-03-02T00:00:00") == []
