"""
Tests for custom exception classes and their rendering

Each error kind maps to exactly one status code and renders with the
standard error envelope.
"""

import pytest
from fastapi import FastAPI, status
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, Field

from campaigns_api.exception_handlers import register_exception_handlers
from campaigns_api.exceptions import (
    AssociationNotFoundError,
    AuthenticationError,
    CampaignChallengeNotFoundError,
    CampaignNotFoundError,
    CampaignsAPIError,
    ChallengeNotFoundError,
    ErrorCode,
    FieldError,
    HasAssociationsError,
    ParticipantNotFoundError,
    ParticipantNotInCampaignError,
    TenantAccessDeniedError,
    TenantMismatchError,
    ValidationError,
)


class TestCampaignsAPIError:
    def test_defaults(self):
        exc = CampaignsAPIError("Test error")
        assert str(exc) == "Test error"
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.error_code == ErrorCode.INTERNAL_ERROR
        assert exc.details == {}


class TestStatusMapping:
    @pytest.mark.parametrize(
        "exc,expected_status,expected_code",
        [
            (AuthenticationError(), 401, ErrorCode.UNAUTHENTICATED),
            (TenantAccessDeniedError("acme", "suspended"), 403, ErrorCode.FORBIDDEN),
            (CampaignNotFoundError("c1"), 404, ErrorCode.NOT_FOUND),
            (ChallengeNotFoundError("c1"), 404, ErrorCode.NOT_FOUND),
            (CampaignChallengeNotFoundError("c1"), 404, ErrorCode.NOT_FOUND),
            (ParticipantNotFoundError("p1"), 404, ErrorCode.NOT_FOUND),
            (AssociationNotFoundError(), 404, ErrorCode.NOT_FOUND),
            (TenantMismatchError(), 403, ErrorCode.TENANT_MISMATCH),
            (ParticipantNotInCampaignError("p1", "c1"), 422, ErrorCode.PARTICIPANT_NOT_IN_CAMPAIGN),
            (HasAssociationsError("Challenge", "c1"), 422, ErrorCode.HAS_ASSOCIATIONS),
            (ValidationError.for_field("name", "can't be blank", "required"), 422, ErrorCode.VALIDATION_ERROR),
        ],
    )
    def test_each_kind_has_one_status(self, exc, expected_status, expected_code):
        assert exc.status_code == expected_status
        assert exc.error_code == expected_code

    def test_not_found_message_names_resource(self):
        exc = ParticipantNotFoundError("p1")
        assert exc.message == "Participant not found"
        assert exc.details == {"resource_type": "Participant", "resource_id": "p1"}


class TestValidationError:
    def test_collects_field_errors(self):
        exc = ValidationError(
            [
                FieldError(field="name", message="should have at least 3 characters", rule="length"),
                FieldError(field="start_time", message="must be before end_time", rule="date_order"),
            ]
        )

        assert exc.fields() == {"name", "start_time"}
        assert exc.details["validation_errors"][1] == {
            "field": "start_time",
            "message": "must be before end_time",
            "rule": "date_order",
        }


class Payload(BaseModel):
    name: str = Field(min_length=3)


@pytest.fixture
async def error_client():
    """Minimal app that raises each kind of error."""
    test_app = FastAPI()
    register_exception_handlers(test_app)

    @test_app.get("/mismatch")
    async def mismatch():
        raise TenantMismatchError(details={"participant_id": "p1"})

    @test_app.get("/crash")
    async def crash():
        raise RuntimeError("database password is hunter2")

    @test_app.post("/payload")
    async def payload(body: Payload):
        return body

    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestExceptionHandlers:
    async def test_domain_error_envelope(self, error_client):
        response = await error_client.get("/mismatch")

        assert response.status_code == 403
        assert response.json() == {
            "error": {
                "status_code": 403,
                "error_code": "tenant_mismatch",
                "message": "Resources not found in tenant",
                "type": "Forbidden",
                "details": {"participant_id": "p1"},
                "path": "/mismatch",
            }
        }

    async def test_request_validation_envelope(self, error_client):
        response = await error_client.post("/payload", json={"name": "x"})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["error_code"] == "validation_error"
        assert error["message"] == "Validation failed"
        assert error["details"]["validation_errors"][0]["field"] == "name"

    async def test_unhandled_error_hides_internals(self, error_client):
        response = await error_client.get("/crash")

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["error_code"] == "internal_error"
        assert "hunter2" not in response.text

    async def test_unknown_route(self, error_client):
        response = await error_client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "not_found"
