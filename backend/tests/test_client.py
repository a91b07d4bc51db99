# tests/test_client.py
import pytest

from church_admin.client import ApiClient, ApiError, ResourceStore, build_stores


@pytest.fixture()
def stores(client):
    return build_stores(ApiClient(session=client))


def test_resource_store_crud_cycle(stores):
    churches: ResourceStore = stores["churches"]

    created = churches.create({"address": "5 Bonifacio St.", "latitude": 14, "longitude": 120})
    assert churches.items[0]["id"] == created["id"]
    assert churches.current == created
    assert churches.is_creating is False

    churches.fetch(page=1, page_size=5)
    assert churches.total == 1
    assert churches.total_pages == 1
    assert churches.page_size == 5

    updated = churches.update(created["id"], {"address": "6 Bonifacio St."})
    assert churches.items[0]["address"] == "6 Bonifacio St."
    assert churches.current["address"] == updated["address"]

    churches.delete(created["id"])
    assert churches.items == []
    assert churches.total == 0
    assert churches.current is None


def test_resource_store_records_api_errors(stores):
    positions = stores["positions"]

    with pytest.raises(ApiError) as exc:
        positions.create({"name": "No description"})
    assert exc.value.status_code == 400
    assert positions.error == "Description is required"
    assert positions.is_creating is False

    with pytest.raises(ApiError):
        positions.get(12345)
    assert positions.error == "Position not found"


def test_filters_are_sent_and_reset(stores):
    subjects = stores["subjects"]
    subjects.create({"name": "Choir", "description": "Music"})
    subjects.create({"name": "Outreach", "description": "Missions"})

    subjects.set_filters(name="choir")
    subjects.fetch()
    assert [s["name"] for s in subjects.items] == ["Choir"]

    subjects.reset_filters()
    subjects.fetch()
    assert subjects.total == 2

    subjects.reset()
    assert subjects.items == [] and subjects.filters == {}


def test_auth_store_login_check_logout(client, stores):
    client.post(
        "/create-admin",
        json={"firstName": "A", "lastName": "B", "email": "store@church.local", "password": "store-pass-1"},
    )
    auth = stores["auth"]

    user = auth.login("store@church.local", "store-pass-1")
    assert user["role"] == "admin"
    assert auth.check_session()["email"] == "store@church.local"

    auth.logout()
    assert auth.current_user is None
    assert auth.check_session() is None


def test_auth_store_failed_login(stores):
    auth = stores["auth"]
    with pytest.raises(ApiError):
        auth.login("ghost@church.local", "whatever-1")
    assert auth.error == "Invalid email or password"
    assert auth.current_user is None
