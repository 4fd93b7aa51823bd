import enum
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import relationship

from campaigns_api.database import Base
from campaigns_api.utils.datetime_utils import utcnow


class ParticipantStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    ineligible = "ineligible"


class Participant(Base):
    __tablename__ = "participants"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = Column(String(255), ForeignKey("tenants.id"), nullable=False)
    name = Column(String(255), nullable=False)
    nickname = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default=ParticipantStatus.active.value)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    tenant = relationship("Tenant", back_populates="participants")

    __table_args__ = (
        UniqueConstraint("tenant_id", "nickname", name="uq_participants_tenant_nickname"),
        Index("idx_participant_tenant_created", "tenant_id", "created_at"),
    )
