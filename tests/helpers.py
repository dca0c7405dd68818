"""Helpers for talking to the service in tests."""

from typing import Dict

from httpx import AsyncClient

PASSWORD = "Secret123"


async def register(client: AsyncClient, email: str, username: str) -> None:
    response = await client.post(
        "/auth/register",
        json={"email": email, "username": username, "password": PASSWORD},
    )
    assert response.status_code == 201, response.text


async def login_headers(client: AsyncClient, email: str, username: str) -> Dict[str, str]:
    await register(client, email, username)
    response = await client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
