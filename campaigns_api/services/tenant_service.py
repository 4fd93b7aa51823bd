"""
Tenant Service

Just-in-time provisioning and status management for Tenant entities.
All functions accept an injected AsyncSession.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campaigns_api.exceptions import ValidationError
from campaigns_api.models.tenant import Tenant, TenantStatus
from campaigns_api.utils.datetime_utils import utcnow

logger = logging.getLogger(__name__)


async def get_tenant(tenant_id: str, db: AsyncSession) -> Tenant | None:
    """Return a Tenant by identifier, or None if not found."""
    result = await db.execute(select(Tenant).where(Tenant.id == tenant_id))
    return result.scalars().first()


async def create_tenant(tenant_id: str, db: AsyncSession, name: str | None = None) -> Tenant:
    """
    Create a tenant, naming it after its identifier unless a name is given.

    Raises ValidationError for a blank identifier or an identifier already taken.
    """
    if not tenant_id:
        raise ValidationError.for_field("id", "can't be blank", "required")

    tenant = Tenant(id=tenant_id, name=name or tenant_id, status=TenantStatus.active.value)
    db.add(tenant)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ValidationError.for_field("id", "has already been taken", "unique") from e
    await db.refresh(tenant)
    logger.info("Tenant created: id=%s", tenant.id)
    return tenant


async def get_or_create_tenant(tenant_id: str, db: AsyncSession) -> Tenant:
    """
    Return the tenant, provisioning it on first contact.

    The insert relies on the primary key constraint. When a concurrent
    request wins the race, the conflicting insert is rolled back and the
    winner's row is read instead. Existing rows are returned untouched.
    """
    tenant = await get_tenant(tenant_id, db)
    if tenant is not None:
        return tenant

    tenant = Tenant(id=tenant_id, name=tenant_id, status=TenantStatus.active.value)
    db.add(tenant)
    try:
        await db.commit()
    except IntegrityError:
        logger.info("Tenant %s provisioned concurrently, reading existing row", tenant_id)
        await db.rollback()
        tenant = await get_tenant(tenant_id, db)
        if tenant is None:
            raise
        return tenant

    await db.refresh(tenant)
    logger.info("Tenant provisioned just-in-time: id=%s", tenant.id)
    return tenant


def is_tenant_active(tenant: Tenant) -> bool:
    """True only for active tenants; suspended and deleted tenants are locked out."""
    return tenant.status == TenantStatus.active.value


async def _set_status(tenant_id: str, status: TenantStatus, db: AsyncSession) -> Tenant | None:
    tenant = await get_tenant(tenant_id, db)
    if tenant is None:
        return None
    tenant.status = status.value
    tenant.deleted_at = utcnow() if status == TenantStatus.deleted else None
    await db.commit()
    await db.refresh(tenant)
    logger.info("Tenant %s status set to %s", tenant.id, tenant.status)
    return tenant


async def suspend_tenant(tenant_id: str, db: AsyncSession) -> Tenant | None:
    """
    Set a tenant's status to 'suspended'.

    Returns None if the tenant does not exist.
    """
    return await _set_status(tenant_id, TenantStatus.suspended, db)


async def delete_tenant(tenant_id: str, db: AsyncSession) -> Tenant | None:
    """
    Soft-delete a tenant by setting status to 'deleted' and stamping deleted_at.

    Returns None if the tenant does not exist.
    """
    return await _set_status(tenant_id, TenantStatus.deleted, db)


async def activate_tenant(tenant_id: str, db: AsyncSession) -> Tenant | None:
    """Return a suspended or deleted tenant to 'active'."""
    return await _set_status(tenant_id, TenantStatus.active, db)
