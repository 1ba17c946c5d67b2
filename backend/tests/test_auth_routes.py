"""Tests for POST /api/ValidateLogin."""

import logging

import pytest

from vsradmin.routes.auth import INVALID_CREDENTIALS_MESSAGE
from vsradmin.schemas.auth import LoginResult


class TestValidateLogin:

    @pytest.mark.asyncio
    async def test_valid_credentials(self, test_client, company_service):
        company_service.validate_credentials.return_value = LoginResult(
            username="ops", full_name="Operations Desk"
        )

        response = await test_client.post(
            "/api/ValidateLogin", json={"username": "ops", "password": "hunter2"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "Success"
        assert body["data"] == {"username": "ops", "fullName": "Operations Desk"}
        values = company_service.validate_credentials.await_args.args[0]
        assert values.username == "ops"
        assert values.password == "hunter2"

    @pytest.mark.asyncio
    async def test_invalid_credentials_is_failure_envelope(self, test_client, company_service):
        company_service.validate_credentials.return_value = None

        response = await test_client.post(
            "/api/ValidateLogin", json={"username": "ops", "password": "wrong"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "status": "Failure",
            "message": INVALID_CREDENTIALS_MESSAGE,
            "data": None,
        }

    @pytest.mark.asyncio
    async def test_password_not_logged(self, test_client, company_service, caplog):
        company_service.validate_credentials.return_value = None
        caplog.set_level(logging.DEBUG)

        await test_client.post(
            "/api/ValidateLogin", json={"username": "ops", "password": "do-not-log-me"}
        )

        assert all("do-not-log-me" not in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"username": "ops"}, {"username": "", "password": "x"}])
    async def test_incomplete_body_is_400(self, test_client, company_service, payload):
        response = await test_client.post("/api/ValidateLogin", json=payload)

        assert response.status_code == 400
        assert response.json()["status"] == "Failure"
        company_service.validate_credentials.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unparseable_body_is_400(self, test_client):
        response = await test_client.post(
            "/api/ValidateLogin",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid request payload")

    @pytest.mark.asyncio
    async def test_service_error_is_500(self, test_client, company_service):
        company_service.validate_credentials.side_effect = RuntimeError("db unreachable")

        response = await test_client.post(
            "/api/ValidateLogin", json={"username": "ops", "password": "x"}
        )

        assert response.status_code == 500
        assert response.json()["message"] == "An error occurred: db unreachable"
