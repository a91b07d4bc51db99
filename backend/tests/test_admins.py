# tests/test_admins.py

ADMIN = {
    "email": "pastor@church.local",
    "password": "admin-pass-1",
    "confirmPassword": "admin-pass-1",
    "firstname": "Paolo",
    "lastname": "Reyes",
}


def test_create_and_list_admins_with_projection(client, make_worker):
    make_worker()
    r = client.post("/users/admin", json=ADMIN)
    assert r.status_code == 201, r.text
    admin = r.json()
    assert set(admin) == {"id", "email", "firstname", "lastname", "middlename", "createdAt"}

    body = client.get("/users/admin").json()
    assert body["total"] == 1
    assert body["data"][0]["email"] == "pastor@church.local"


def test_admin_update_and_delete(client):
    admin = client.post("/users/admin", json=ADMIN).json()

    r = client.put(f"/users/admin/{admin['id']}", json={"middlename": "Cruz"})
    assert r.status_code == 200, r.text
    assert r.json()["middlename"] == "Cruz"

    r = client.delete(f"/users/admin/{admin['id']}")
    assert r.status_code == 200
    assert r.json() == {"message": "Admin deleted successfully"}
    assert client.get(f"/users/admin/{admin['id']}").status_code == 404


def test_admin_routes_ignore_workers(client, make_worker):
    worker = make_worker()
    assert client.get(f"/users/admin/{worker['id']}").status_code == 404
    assert client.delete(f"/users/admin/{worker['id']}").status_code == 404


def test_bootstrap_admin(client):
    body = {"firstName": "First", "lastName": "Admin", "email": "root@church.local", "password": "root-pass-1"}
    r = client.post("/create-admin", json=body)
    assert r.status_code == 201, r.text
    assert r.json()["message"] == "Admin account created successfully"
    assert r.json()["user"]["firstname"] == "First"

    again = client.post("/create-admin", json=body)
    assert again.status_code == 400
    assert again.json()["message"] == "Email already in use"


def test_admin_passwords_keep_surrounding_spaces(client):
    spaced = "  root-pass-1  "
    r = client.post(
        "/create-admin",
        json={"firstName": "Sp", "lastName": "Aced", "email": "spaced@church.local", "password": spaced},
    )
    assert r.status_code == 201, r.text
    login = client.post("/auth/login", json={"email": "spaced@church.local", "password": spaced})
    assert login.status_code == 200, login.text

    r = client.post("/users/admin", json={**ADMIN, "password": spaced, "confirmPassword": spaced})
    assert r.status_code == 201, r.text
    login = client.post("/auth/login", json={"email": ADMIN["email"], "password": spaced})
    assert login.status_code == 200, login.text
