"""
Tests for user endpoints.
"""

import pytest
from httpx import AsyncClient

from app.models import User
from conftest import count_rows


@pytest.mark.asyncio
async def test_create_user(client: AsyncClient):
    """Successful creation returns the user in camelCase."""
    response = await client.post("/api/users", json={
        "name": "Carla Nomad",
        "email": "carla@example.com",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Carla Nomad"
    assert data["email"] == "carla@example.com"
    assert "createdAt" in data
    assert isinstance(data["id"], int)


@pytest.mark.asyncio
async def test_create_user_duplicate_email(client: AsyncClient, db_session, test_user):
    """Duplicate email returns 409 and creates nothing."""
    response = await client.post("/api/users", json={
        "name": "Someone Else",
        "email": "alice@example.com",
    })
    assert response.status_code == 409
    assert response.json() == {"error": "Email already exists"}
    assert await count_rows(db_session, User) == 1


@pytest.mark.asyncio
async def test_create_user_email_differs_only_in_case(client: AsyncClient, db_session):
    """Emails are compared case-insensitively and stored lowercased."""
    first = await client.post("/api/users", json={"name": "Carla", "email": "carla@example.com"})
    second = await client.post("/api/users", json={"name": "Carla Again", "email": "Carla@Example.com"})
    assert first.status_code == 201
    assert second.status_code == 409
    assert await count_rows(db_session, User) == 1


@pytest.mark.asyncio
async def test_create_user_email_lowercased(client: AsyncClient):
    response = await client.post("/api/users", json={"name": "Dana", "email": "Dana.Ross@Example.COM"})
    assert response.status_code == 201
    assert response.json()["email"] == "dana.ross@example.com"


@pytest.mark.asyncio
async def test_create_user_missing_name(client: AsyncClient):
    """Missing required field is a 400 with an error body."""
    response = await client.post("/api/users", json={"email": "nobody@example.com"})
    assert response.status_code == 400
    assert "name" in response.json()["error"]


@pytest.mark.asyncio
async def test_create_user_invalid_email(client: AsyncClient):
    response = await client.post("/api/users", json={"name": "Bad Email", "email": "not-an-email"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_users_sorted_by_name(client: AsyncClient, test_user, second_user):
    response = await client.get("/api/users")
    assert response.status_code == 200
    names = [u["name"] for u in response.json()]
    assert names == ["Alice Traveller", "Bob Backpacker"]


@pytest.mark.asyncio
async def test_update_user(client: AsyncClient, test_user):
    user_id = test_user.id
    response = await client.put("/api/users", json={
        "id": user_id,
        "name": "Alice Renamed",
        "email": "alice.renamed@example.com",
    })
    assert response.status_code == 200
    assert response.json()["name"] == "Alice Renamed"
    assert response.json()["email"] == "alice.renamed@example.com"


@pytest.mark.asyncio
async def test_update_user_keeps_own_email(client: AsyncClient, test_user):
    """Re-submitting a user's own email is not a conflict."""
    response = await client.put("/api/users", json={
        "id": test_user.id,
        "name": "Alice T.",
        "email": "alice@example.com",
    })
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_update_user_email_taken(client: AsyncClient, test_user, second_user):
    response = await client.put("/api/users", json={
        "id": second_user.id,
        "name": "Bob",
        "email": "alice@example.com",
    })
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_update_user_not_found(client: AsyncClient):
    response = await client.put("/api/users", json={
        "id": 99999,
        "name": "Ghost",
        "email": "ghost@example.com",
    })
    assert response.status_code == 404
    assert response.json()["error"] == "User not found"


@pytest.mark.asyncio
async def test_delete_user(client: AsyncClient, db_session, test_user):
    user_id = test_user.id
    response = await client.delete(f"/api/users?id={user_id}")
    assert response.status_code == 200
    assert response.json() == {"message": "User deleted successfully", "id": user_id}
    assert await count_rows(db_session, User) == 0


@pytest.mark.asyncio
async def test_delete_user_requires_id(client: AsyncClient):
    response = await client.delete("/api/users")
    assert response.status_code == 400
    assert response.json()["error"] == "User ID is required"


@pytest.mark.asyncio
async def test_delete_user_not_found(client: AsyncClient):
    response = await client.delete("/api/users?id=99999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_user_attached_to_booking(client: AsyncClient, db_session, test_booking, test_user):
    """Users still travelling on a booking cannot be deleted."""
    user_id = test_user.id
    response = await client.delete(f"/api/users?id={user_id}")
    assert response.status_code == 409
    assert await count_rows(db_session, User) == 1


@pytest.mark.asyncio
async def test_delete_user_id_out_of_range(client: AsyncClient):
    response = await client.delete(f"/api/users?id={2**63}")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_user_id_out_of_range(client: AsyncClient):
    response = await client.put("/api/users", json={
        "id": 2**63,
        "name": "Too Big",
        "email": "big@example.com",
    })
    assert response.status_code == 400
