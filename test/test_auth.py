"""
Tests for the access gate
"""

import pytest
from conftest import auth_headers_for, make_token
from jose import jwt
from utils.mock_utils import create_test_tenant

from campaigns_api.auth import extract_tenant_id
from campaigns_api.exceptions import AuthenticationError
from campaigns_api.models.tenant import TenantStatus


class TestExtractTenantId:
    def test_reads_tenant_claim(self):
        assert extract_tenant_id(make_token("acme")) == "acme"

    def test_signature_is_not_verified(self):
        token = make_token("acme")
        header, payload, _ = token.split(".")

        assert extract_tenant_id(f"{header}.{payload}.tampered") == "acme"

    @pytest.mark.parametrize("token", ["not-a-jwt", "", "a.b.c"])
    def test_garbage_token(self, token):
        with pytest.raises(AuthenticationError):
            extract_tenant_id(token)

    def test_missing_claim(self):
        with pytest.raises(AuthenticationError):
            extract_tenant_id(make_token(None, sub="someone"))

    @pytest.mark.parametrize("value", ["", "   ", 42])
    def test_unusable_claim(self, value):
        with pytest.raises(AuthenticationError):
            extract_tenant_id(jwt.encode({"tenant_id": value}, "test-secret", algorithm="HS256"))


class TestAccessGate:
    async def test_missing_header_is_unauthenticated(self, client):
        response = await client.get("/api/campaigns")

        assert response.status_code == 401
        assert response.json()["error"]["error_code"] == "unauthenticated"

    async def test_wrong_scheme_is_unauthenticated(self, client):
        response = await client.get("/api/campaigns", headers={"Authorization": f"Basic {make_token('acme')}"})

        assert response.status_code == 401

    async def test_token_without_tenant_is_unauthenticated(self, client):
        headers = {"Authorization": f"Bearer {make_token(None, sub='someone')}"}

        response = await client.get("/api/campaigns", headers=headers)

        assert response.status_code == 401

    async def test_first_contact_provisions_tenant(self, client):
        response = await client.get("/api/tenant", headers=auth_headers_for("newcomer"))

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "newcomer"
        assert body["name"] == "newcomer"
        assert body["status"] == "active"
        assert body["created_at"].endswith("Z")

    @pytest.mark.parametrize("status", [TenantStatus.suspended.value, TenantStatus.deleted.value])
    async def test_inactive_tenant_is_forbidden(self, client, test_db, status):
        await create_test_tenant(test_db, "locked", status=status)

        response = await client.get("/api/campaigns", headers=auth_headers_for("locked"))

        assert response.status_code == 403
        error = response.json()["error"]
        assert error["error_code"] == "forbidden"
        assert error["message"] == "Tenant access denied"

    async def test_health_is_open(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
