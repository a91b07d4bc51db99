# tests/test_subjects.py


def test_subject_defaults_to_enabled(client):
    r = client.post("/subjects", json={"name": "Choir", "description": "Music ministry"})
    assert r.status_code == 201, r.text
    assert r.json()["disabled"] is False

    r = client.post("/subjects", json={"name": "Old", "description": "Retired", "disabled": None})
    assert r.status_code == 201
    assert r.json()["disabled"] is False


def test_filter_by_disabled(client, make_subject):
    make_subject(name="A")
    make_subject(name="B", disabled=True)

    r = client.get("/subjects", params={"disabled": "true"})
    assert r.status_code == 200
    assert [s["name"] for s in r.json()["data"]] == ["B"]


def test_delete_is_blocked_while_users_are_linked(client, make_subject, make_worker):
    subject = make_subject()
    worker = make_worker(subjects=[subject["id"]])
    assert [link["subjectId"] for link in worker["userSubjects"]] == [subject["id"]]

    r = client.delete(f"/subjects/{subject['id']}")
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot delete subject with associated users"

    r = client.put(f"/users/workers/{worker['id']}", json={"subjects": []})
    assert r.status_code == 200, r.text
    assert r.json()["userSubjects"] == []

    r = client.delete(f"/subjects/{subject['id']}")
    assert r.status_code == 200
    assert r.json()["message"] == "Subject deleted successfully"


def test_get_by_id_includes_linked_users(client, make_subject, make_worker):
    subject = make_subject()
    worker = make_worker(subjects=[subject["id"]])

    got = client.get(f"/subjects/{subject['id']}").json()
    assert len(got["userSubjects"]) == 1
    link = got["userSubjects"][0]
    assert link["userId"] == worker["id"]
    assert link["user"]["email"] == worker["email"]


def test_update_toggles_disabled(client, make_subject):
    subject = make_subject()
    r = client.put(f"/subjects/{subject['id']}", json={"disabled": True})
    assert r.status_code == 200
    assert r.json()["disabled"] is True
    assert r.json()["description"] == subject["description"]
