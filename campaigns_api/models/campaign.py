import enum
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from campaigns_api.database import Base
from campaigns_api.utils.datetime_utils import utcnow


class CampaignStatus(str, enum.Enum):
    active = "active"
    paused = "paused"


class Campaign(Base):
    __tablename__ = "campaigns"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = Column(String(255), ForeignKey("tenants.id"), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)
    status = Column(String(20), nullable=False, default=CampaignStatus.active.value)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    tenant = relationship("Tenant", back_populates="campaigns")
    campaign_challenges = relationship("CampaignChallenge", back_populates="campaign", passive_deletes=True)

    __table_args__ = (
        Index("idx_campaign_tenant_created", "tenant_id", "created_at"),
        Index("idx_campaign_tenant_updated", "tenant_id", "updated_at"),
    )
