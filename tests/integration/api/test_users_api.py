"""Integration tests for user registration."""

import asyncio

import pytest
from httpx import AsyncClient


class TestRegisterAPI:
    @pytest.mark.asyncio
    async def test_register_returns_token(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/users",
            json={"name": "A", "email": "a@x.com", "password": "secret1"},
        )

        assert response.status_code == 200
        assert response.json()["token"]

    @pytest.mark.asyncio
    async def test_duplicate_email_is_rejected_and_account_kept(
        self, client: AsyncClient
    ) -> None:
        first = await client.post(
            "/api/users", json={"name": "A", "email": "dup@x.com", "password": "secret1"}
        )

        response = await client.post(
            "/api/users", json={"name": "B", "email": "dup@x.com", "password": "other12"}
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "USER_ALREADY_EXISTS"
        assert data["message"] == "User already exists"

        # The original account is untouched by the rejected registration
        login = await client.post(
            "/api/auth", json={"email": "dup@x.com", "password": "secret1"}
        )
        rejected_login = await client.post(
            "/api/auth", json={"email": "dup@x.com", "password": "other12"}
        )
        me = await client.get(
            "/api/auth", headers={"Authorization": f"Bearer {first.json()['token']}"}
        )
        assert login.status_code == 200
        assert rejected_login.status_code == 400
        assert me.json()["name"] == "A"

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_registration_returns_one_400(
        self, client: AsyncClient
    ) -> None:
        body = {"name": "A", "email": "race@x.com", "password": "secret1"}

        responses = await asyncio.gather(
            client.post("/api/users", json=body),
            client.post("/api/users", json=body),
        )

        assert sorted(r.status_code for r in responses) == [200, 400]
        rejected = next(r for r in responses if r.status_code == 400)
        assert rejected.json()["error_code"] == "USER_ALREADY_EXISTS"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"email": "a@x.com", "password": "secret1"},
            {"name": "A", "email": "not-an-email", "password": "secret1"},
            {"name": "A", "email": "a@x.com", "password": "short"},
            {"name": "   ", "email": "a@x.com", "password": "secret1"},
        ],
    )
    async def test_invalid_body_returns_400(self, client: AsyncClient, body: dict) -> None:
        response = await client.post("/api/users", json=body)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
