# tests/test_churches.py


def test_create_church_returns_201_with_empty_gallery(client):
    r = client.post("/church", json={"address": "1 Mabini St.", "latitude": 14, "longitude": 121})
    assert r.status_code == 201, r.text
    body = r.json()
    assert isinstance(body["id"], int)
    assert body["images"] == []

    got = client.get(f"/church/{body['id']}")
    assert got.status_code == 200
    assert got.json()["address"] == "1 Mabini St."
    assert got.json()["latitude"] == 14
    assert got.json()["longitude"] == 121
    assert got.json()["createdAt"] == body["createdAt"]


def test_create_church_accepts_image_objects_and_plain_urls(client):
    r = client.post(
        "/church",
        json={
            "address": "2 Luna St.",
            "latitude": 15,
            "longitude": 120,
            "images": [{"image": "https://img.test/a.jpg"}, "https://img.test/b.jpg"],
        },
    )
    assert r.status_code == 201, r.text
    images = [img["image"] for img in r.json()["images"]]
    assert images == ["https://img.test/a.jpg", "https://img.test/b.jpg"]
    assert all(img["churchId"] == r.json()["id"] for img in r.json()["images"])


def test_missing_address_is_rejected_with_message(client):
    r = client.post("/church", json={"latitude": 14, "longitude": 120})
    assert r.status_code == 400
    assert r.json()["message"] == "Address is required"
    assert r.json()["errors"]


def test_update_replaces_images_wholesale(client, make_church):
    church = make_church(images=["https://img.test/old1.jpg", "https://img.test/old2.jpg"])

    r = client.put(f"/church/{church['id']}", json={"images": ["https://img.test/new.jpg"]})
    assert r.status_code == 200, r.text
    assert [i["image"] for i in r.json()["images"]] == ["https://img.test/new.jpg"]
    assert r.json()["address"] == church["address"]


def test_update_without_images_keeps_gallery(client, make_church):
    church = make_church(images=["https://img.test/keep.jpg"])

    r = client.put(f"/church/{church['id']}", json={"address": "99 New Address"})
    assert r.status_code == 200, r.text
    assert r.json()["address"] == "99 New Address"
    assert [i["image"] for i in r.json()["images"]] == ["https://img.test/keep.jpg"]


def test_delete_church_detaches_workers(client, make_church, make_worker):
    church = make_church()
    worker = make_worker(churchId=church["id"])
    assert worker["churchId"] == church["id"]

    r = client.delete(f"/church/{church['id']}")
    assert r.status_code == 200
    assert r.json() == {"message": "Church deleted successfully"}

    assert client.get(f"/church/{church['id']}").status_code == 404
    w = client.get(f"/users/workers/{worker['id']}").json()
    assert w["churchId"] is None
    assert w["church"] is None


def test_unknown_church_is_404(client):
    r = client.get("/church/9999")
    assert r.status_code == 404
    assert r.json() == {"message": "Church not found"}
    assert client.put("/church/9999", json={"address": "x"}).status_code == 404
    assert client.delete("/church/9999").status_code == 404


def test_list_filters_by_address_and_latitude(client, make_church):
    make_church(address="Malolos Cathedral", latitude=14)
    make_church(address="Tarlac Chapel", latitude=15)
    make_church(address="Malolos Annex", latitude=15)

    r = client.get("/church", params={"address": "malolos"})
    assert r.status_code == 200
    assert r.json()["total"] == 2

    r = client.get("/church", params={"address": "malolos", "latitude": 15})
    assert [c["address"] for c in r.json()["data"]] == ["Malolos Annex"]
