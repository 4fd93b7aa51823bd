"""
Access gate for every /api route.

The bearer token is decoded without signature verification; signature and
expiry checks belong to the upstream identity provider. The tenant claim is
provisioned on first contact and must be active to proceed.
"""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from campaigns_api.config import settings
from campaigns_api.database import get_db
from campaigns_api.exceptions import AuthenticationError, TenantAccessDeniedError
from campaigns_api.models.tenant import Tenant
from campaigns_api.services.tenant_service import get_or_create_tenant, is_tenant_active

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def extract_tenant_id(token: str) -> str:
    """Return the tenant claim of a JWT, raising AuthenticationError when it is absent or blank."""
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError as e:
        logger.debug("Rejected undecodable bearer token: %s", e)
        raise AuthenticationError() from e

    tenant_id = claims.get(settings.tenant_claim)
    if not isinstance(tenant_id, str) or not tenant_id.strip():
        logger.debug("Bearer token has no usable '%s' claim", settings.tenant_claim)
        raise AuthenticationError()
    return tenant_id


async def get_current_tenant(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Tenant:
    """
    Resolve the calling tenant.

    Raises:
        AuthenticationError: no bearer token, or no tenant claim in it
        TenantAccessDeniedError: the tenant is suspended or deleted
    """
    if credentials is None:
        raise AuthenticationError()

    tenant_id = extract_tenant_id(credentials.credentials)
    tenant = await get_or_create_tenant(tenant_id, db)

    if not is_tenant_active(tenant):
        logger.warning("Access denied for tenant %s with status %s", tenant.id, tenant.status)
        raise TenantAccessDeniedError(tenant.id, tenant.status)

    request.state.tenant_id = tenant.id
    return tenant
