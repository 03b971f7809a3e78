import pytest

from domain.entities.identifiers import new_id

pytestmark = pytest.mark.asyncio


async def test_register_and_fetch_user(client):
    response = await client.post(
        "/api/users/",
        json={"username": "Dana", "email": "Dana@Example.com", "fullName": "Dana D", "avatar": "https://a/d.png"},
    )

    assert response.status_code == 201
    user = response.json()["data"]
    assert user["username"] == "dana"
    assert user["email"] == "dana@example.com"
    assert user["fullName"] == "Dana D"

    response = await client.get(f"/api/users/{user['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["avatar"] == "https://a/d.png"


async def test_duplicate_username_conflicts(client):
    payload = {"username": "erin", "email": "erin@example.com"}
    await client.post("/api/users/", json=payload)

    response = await client.post("/api/users/", json={**payload, "email": "other@example.com"})

    assert response.status_code == 409
    assert response.json()["message"] == "User with this username already exists"


async def test_get_user_errors(client):
    assert (await client.get("/api/users/123")).status_code == 400
    assert (await client.get(f"/api/users/{new_id()}")).status_code == 404


async def test_token_for_unknown_username(client):
    response = await client.post("/api/users/token", json={"username": "ghost"})

    assert response.status_code == 404
