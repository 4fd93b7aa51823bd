"""
Tenant model.

Each Tenant is an isolated client organisation. Rows are provisioned
just-in-time from the tenant identifier carried by the bearer token and are
never hard-deleted: deactivation happens through status transitions only.
"""

import enum

from sqlalchemy import Column, DateTime, Index, String
from sqlalchemy.orm import relationship

from campaigns_api.database import Base
from campaigns_api.utils.datetime_utils import utcnow


class TenantStatus(str, enum.Enum):
    active = "active"
    suspended = "suspended"
    deleted = "deleted"


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(String(255), primary_key=True)  # caller-supplied, immutable
    name = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default=TenantStatus.active.value)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    campaigns = relationship("Campaign", back_populates="tenant", passive_deletes=True)
    participants = relationship("Participant", back_populates="tenant", passive_deletes=True)

    __table_args__ = (Index("idx_tenant_status", "status"),)
