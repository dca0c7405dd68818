"""Tests for the entries and auth endpoints of the service."""

import uuid

import pytest
from httpx import AsyncClient

from tests.helpers import PASSWORD, login_headers, register


@pytest.mark.asyncio
async def test_health(api_client: AsyncClient) -> None:
    response = await api_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "ok"}


@pytest.mark.asyncio
async def test_register_rejects_duplicate_email(api_client: AsyncClient) -> None:
    await register(api_client, "alice@example.com", "alice")

    response = await api_client.post(
        "/auth/register",
        json={"email": "alice@example.com", "username": "alice2", "password": PASSWORD},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


@pytest.mark.asyncio
async def test_login_with_wrong_password(api_client: AsyncClient) -> None:
    await register(api_client, "alice@example.com", "alice")

    response = await api_client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "Wrong1234"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_and_refresh(api_client: AsyncClient) -> None:
    headers = await login_headers(api_client, "alice@example.com", "alice")

    me = await api_client.get("/auth/me", headers=headers)
    refreshed = await api_client.post("/auth/refresh", headers=headers)

    assert me.status_code == 200
    assert me.json()["email"] == "alice@example.com"
    assert refreshed.status_code == 200
    new_headers = {"Authorization": f"Bearer {refreshed.json()['access_token']}"}
    assert (await api_client.get("/auth/me", headers=new_headers)).status_code == 200


@pytest.mark.asyncio
async def test_entries_require_authentication(api_client: AsyncClient) -> None:
    missing = await api_client.get("/entries/")
    invalid = await api_client.get("/entries/", headers={"Authorization": "Bearer nonsense"})

    assert missing.status_code in (401, 403)
    assert invalid.status_code == 401


@pytest.mark.asyncio
async def test_create_and_list_newest_first(api_client: AsyncClient) -> None:
    headers = await login_headers(api_client, "alice@example.com", "alice")

    for title in ("first", "second", "third"):
        response = await api_client.post(
            "/entries/", json={"title": title, "content": "body"}, headers=headers
        )
        assert response.status_code == 201

    response = await api_client.get("/entries/", headers=headers)
    body = response.json()

    assert response.status_code == 200
    assert body["total"] == 3
    assert [entry["title"] for entry in body["entries"]] == ["third", "second", "first"]


@pytest.mark.asyncio
async def test_create_for_another_owner_is_forbidden(api_client: AsyncClient) -> None:
    headers = await login_headers(api_client, "alice@example.com", "alice")

    response = await api_client.post(
        "/entries/",
        json={"title": "t", "content": "c", "owner_id": str(uuid.uuid4())},
        headers=headers,
    )

    assert response.status_code == 403


@pytest.mark.parametrize("payload", [{"title": "", "content": "c"}, {"title": "t", "content": "   "}])
@pytest.mark.asyncio
async def test_blank_fields_are_rejected(api_client: AsyncClient, payload) -> None:
    headers = await login_headers(api_client, "alice@example.com", "alice")

    response = await api_client.post("/entries/", json=payload, headers=headers)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_keeps_owner_and_created_at(api_client: AsyncClient) -> None:
    headers = await login_headers(api_client, "alice@example.com", "alice")
    created = (
        await api_client.post("/entries/", json={"title": "A", "content": "B"}, headers=headers)
    ).json()

    response = await api_client.put(
        f"/entries/{created['id']}", json={"title": "A2", "content": "B2"}, headers=headers
    )
    updated = response.json()

    assert response.status_code == 200
    assert updated["id"] == created["id"]
    assert (updated["title"], updated["content"]) == ("A2", "B2")
    assert updated["owner_id"] == created["owner_id"]
    assert updated["created_at"] == created["created_at"]


@pytest.mark.asyncio
async def test_foreign_entries_are_invisible_and_protected(api_client: AsyncClient) -> None:
    alice = await login_headers(api_client, "alice@example.com", "alice")
    bob = await login_headers(api_client, "bob@example.com", "bob")
    created = (
        await api_client.post("/entries/", json={"title": "A", "content": "B"}, headers=alice)
    ).json()

    listed = await api_client.get("/entries/", headers=bob)
    update = await api_client.put(
        f"/entries/{created['id']}", json={"title": "x", "content": "y"}, headers=bob
    )
    delete = await api_client.delete(f"/entries/{created['id']}", headers=bob)

    assert listed.json()["entries"] == []
    assert update.status_code == 403
    assert delete.status_code == 403
    assert (await api_client.get("/entries/", headers=alice)).json()["total"] == 1


@pytest.mark.asyncio
async def test_delete_then_missing(api_client: AsyncClient) -> None:
    headers = await login_headers(api_client, "alice@example.com", "alice")
    created = (
        await api_client.post("/entries/", json={"title": "A", "content": "B"}, headers=headers)
    ).json()

    first = await api_client.delete(f"/entries/{created['id']}", headers=headers)
    second = await api_client.delete(f"/entries/{created['id']}", headers=headers)
    update = await api_client.put(
        f"/entries/{created['id']}", json={"title": "x", "content": "y"}, headers=headers
    )

    assert first.status_code == 204
    assert second.status_code == 404
    assert update.status_code == 404
    assert second.json()["detail"] == "Entry not found"
