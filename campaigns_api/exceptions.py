"""
Custom Exception Classes for the Campaigns API

Every expected business outcome that is not a success is raised as one of
the exceptions below. Each carries a machine-readable ``error_code`` and
maps to exactly one HTTP status code, so the exception handlers can render
them without inspecting the message.
"""

import enum
from dataclasses import asdict, dataclass
from typing import Any

from fastapi import status


class ErrorCode(str, enum.Enum):
    NOT_FOUND = "not_found"
    TENANT_MISMATCH = "tenant_mismatch"
    PARTICIPANT_NOT_IN_CAMPAIGN = "participant_not_in_campaign"
    HAS_ASSOCIATIONS = "has_associations"
    VALIDATION_ERROR = "validation_error"
    FORBIDDEN = "forbidden"
    UNAUTHENTICATED = "unauthenticated"
    INTERNAL_ERROR = "internal_error"


class CampaignsAPIError(Exception):
    """Base exception class for all Campaigns API errors"""

    error_code = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Authentication & Authorization Exceptions
# ============================================================================


class AuthenticationError(CampaignsAPIError):
    """Raised when the bearer credential is missing or carries no tenant"""

    error_code = ErrorCode.UNAUTHENTICATED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message=message, status_code=status.HTTP_401_UNAUTHORIZED)


class TenantAccessDeniedError(CampaignsAPIError):
    """Raised when the resolved tenant is suspended or deleted"""

    error_code = ErrorCode.FORBIDDEN

    def __init__(self, tenant_id: str, tenant_status: str):
        super().__init__(
            message="Tenant access denied",
            status_code=status.HTTP_403_FORBIDDEN,
            details={"tenant_id": tenant_id, "status": tenant_status},
        )


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(CampaignsAPIError):
    """
    Base class for resource not found errors.

    Also raised for resources owned by another tenant, which must be
    indistinguishable from missing ones.
    """

    error_code = ErrorCode.NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any | None = None):
        message = f"{resource_type} not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class CampaignNotFoundError(ResourceNotFoundError):
    def __init__(self, campaign_id: Any | None = None):
        super().__init__(resource_type="Campaign", resource_id=campaign_id)


class ChallengeNotFoundError(ResourceNotFoundError):
    def __init__(self, challenge_id: Any | None = None):
        super().__init__(resource_type="Challenge", resource_id=challenge_id)


class CampaignChallengeNotFoundError(ResourceNotFoundError):
    def __init__(self, campaign_challenge_id: Any | None = None):
        super().__init__(resource_type="Campaign challenge", resource_id=campaign_challenge_id)


class ParticipantNotFoundError(ResourceNotFoundError):
    def __init__(self, participant_id: Any | None = None):
        super().__init__(resource_type="Participant", resource_id=participant_id)


class AssociationNotFoundError(ResourceNotFoundError):
    def __init__(self):
        super().__init__(resource_type="Association")


# ============================================================================
# Association Exceptions
# ============================================================================


class TenantMismatchError(CampaignsAPIError):
    """Raised when an association pairs resources that do not share the caller's tenant"""

    error_code = ErrorCode.TENANT_MISMATCH

    def __init__(self, message: str = "Resources not found in tenant", details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status.HTTP_403_FORBIDDEN, details=details)


class ParticipantNotInCampaignError(CampaignsAPIError):
    error_code = ErrorCode.PARTICIPANT_NOT_IN_CAMPAIGN

    def __init__(self, participant_id: str, challenge_id: str):
        super().__init__(
            message="Participant not associated with challenge's campaign",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"participant_id": participant_id, "challenge_id": challenge_id},
        )


class HasAssociationsError(CampaignsAPIError):
    error_code = ErrorCode.HAS_ASSOCIATIONS

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            message=f"{resource_type} has campaign associations and cannot be deleted",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


# ============================================================================
# Validation Exceptions
# ============================================================================


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    rule: str


class ValidationError(CampaignsAPIError):
    """Raised when one or more field-level rules fail"""

    error_code = ErrorCode.VALIDATION_ERROR

    def __init__(self, errors: list[FieldError], message: str = "Validation failed"):
        self.errors = list(errors)
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"validation_errors": [asdict(error) for error in self.errors]},
        )

    @classmethod
    def for_field(cls, field: str, message: str, rule: str) -> "ValidationError":
        return cls([FieldError(field=field, message=message, rule=rule)])

    def fields(self) -> set[str]:
        return {error.field for error in self.errors}
