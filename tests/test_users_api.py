"""Tests for the user endpoints."""

import pytest
from fastapi.testclient import TestClient
from users_api.config import Settings
from users_api.main import create_app
from users_api.services.user_store import UserStore

NEW_USER = {"name": "Al Li", "email": "al@x.com", "age": 40}


@pytest.mark.unit
def test_list_users_returns_seed_records(client: TestClient) -> None:
    response = client.get("/api/users")

    assert response.status_code == 200
    assert response.json() == [
        {"id": 1, "name": "John Doe", "email": "john.doe@example.com", "age": 30},
        {"id": 2, "name": "Jane Smith", "email": "jane.smith@example.com", "age": 25},
    ]


@pytest.mark.unit
def test_list_users_trailing_slash(client: TestClient) -> None:
    response = client.get("/api/users/")

    assert response.status_code == 200
    assert len(response.json()) == 2


@pytest.mark.unit
def test_list_users_empty_without_seed() -> None:
    client = TestClient(create_app(Settings(seed_demo_users=False)))

    response = client.get("/api/users")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.unit
def test_get_user(client: TestClient) -> None:
    response = client.get("/api/users/1")

    assert response.status_code == 200
    assert response.json()["name"] == "John Doe"


@pytest.mark.unit
def test_get_missing_user_is_404(client: TestClient) -> None:
    response = client.get("/api/users/42")

    assert response.status_code == 404
    assert response.json() == {"detail": "User not found."}


@pytest.mark.unit
def test_get_user_with_non_integer_id_is_400(client: TestClient) -> None:
    response = client.get("/api/users/abc")

    assert response.status_code == 400
    assert response.json()["detail"][0]["loc"] == ["path", "user_id"]


@pytest.mark.unit
def test_create_user(client: TestClient) -> None:
    response = client.post("/api/users", json=NEW_USER)

    assert response.status_code == 201
    assert response.json() == {"id": 3, **NEW_USER}
    assert response.headers["location"] == "http://testserver/api/users/3"


@pytest.mark.unit
def test_create_user_ignores_client_id(client: TestClient) -> None:
    response = client.post("/api/users/", json={"id": 1, **NEW_USER})

    assert response.status_code == 201
    assert response.json()["id"] == 3
    assert client.get("/api/users/1").json()["name"] == "John Doe"


@pytest.mark.unit
def test_create_user_validation_errors(client: TestClient) -> None:
    response = client.post("/api/users", json={"name": "A", "email": "nope", "age": 12})

    assert response.status_code == 400
    fields = {error["loc"][-1] for error in response.json()["detail"]}
    assert fields == {"name", "email", "age"}
    assert len(client.get("/api/users").json()) == 2


@pytest.mark.unit
def test_create_user_missing_fields(client: TestClient) -> None:
    response = client.post("/api/users", json={"name": "Al Li"})

    assert response.status_code == 400
    assert {error["loc"][-1] for error in response.json()["detail"]} == {"email", "age"}


@pytest.mark.unit
def test_create_user_without_body(client: TestClient) -> None:
    response = client.post("/api/users")

    assert response.status_code == 400


@pytest.mark.unit
def test_update_user(client: TestClient) -> None:
    response = client.put("/api/users/1", json={"name": "Johnny Doe", "email": "johnny@example.com", "age": 31})

    assert response.status_code == 204
    assert response.content == b""
    assert client.get("/api/users/1").json() == {
        "id": 1,
        "name": "Johnny Doe",
        "email": "johnny@example.com",
        "age": 31,
    }


@pytest.mark.unit
def test_update_user_partial_body(client: TestClient) -> None:
    response = client.put("/api/users/2", json={"age": 26})

    assert response.status_code == 204
    assert client.get("/api/users/2").json() == {
        "id": 2,
        "name": "Jane Smith",
        "email": "jane.smith@example.com",
        "age": 26,
    }


@pytest.mark.unit
def test_update_user_validation_error(client: TestClient) -> None:
    response = client.put("/api/users/1", json={"age": 150})

    assert response.status_code == 400
    assert response.json()["detail"][0]["loc"] == ["body", "age"]
    assert client.get("/api/users/1").json()["age"] == 30


@pytest.mark.unit
def test_update_missing_user_is_404(client: TestClient) -> None:
    response = client.put("/api/users/42", json=NEW_USER)

    assert response.status_code == 404


@pytest.mark.unit
def test_delete_user(client: TestClient) -> None:
    response = client.delete("/api/users/1")

    assert response.status_code == 204
    assert response.content == b""
    assert [u["id"] for u in client.get("/api/users").json()] == [2]


@pytest.mark.unit
def test_delete_missing_user_is_404(client: TestClient) -> None:
    response = client.delete("/api/users/42")

    assert response.status_code == 404


@pytest.mark.unit
def test_ids_keep_increasing_after_delete(client: TestClient) -> None:
    first = client.post("/api/users", json=NEW_USER).json()["id"]
    client.delete(f"/api/users/{first}")
    second = client.post("/api/users", json=NEW_USER).json()["id"]

    assert second > first


@pytest.mark.unit
def test_apps_do_not_share_state(client: TestClient) -> None:
    client.delete("/api/users/1")
    other = TestClient(create_app(Settings()))

    assert other.get("/api/users/1").status_code == 200


@pytest.mark.unit
def test_injected_store_is_served() -> None:
    store = UserStore()
    client = TestClient(create_app(Settings(), store=store))

    client.post("/api/users", json=NEW_USER)

    assert [u.name for u in store.list_users()] == ["Al Li"]


@pytest.mark.unit
def test_end_to_end_scenario(client: TestClient) -> None:
    created = client.post("/api/users", json=NEW_USER)
    assert created.status_code == 201
    assert created.json()["id"] == 3

    fetched = client.get("/api/users/3")
    assert fetched.status_code == 200
    assert fetched.json() == created.json()

    updated = client.put("/api/users/3", json={"name": "", "email": "", "age": 0})
    assert updated.status_code == 204
    assert client.get("/api/users/3").json() == created.json()

    assert client.delete("/api/users/2").status_code == 204
    assert client.get("/api/users/2").status_code == 404


@pytest.mark.unit
def test_email_is_stored_as_sent(client: TestClient) -> None:
    created = client.post("/api/users", json={"name": "Al Li", "email": "Al@X.COM", "age": 40})

    assert created.json()["email"] == "Al@X.COM"
    assert client.get(f"/api/users/{created.json()['id']}").json()["email"] == "Al@X.COM"

    client.put("/api/users/1", json={"email": "John@Example.ORG"})

    assert client.get("/api/users/1").json()["email"] == "John@Example.ORG"
