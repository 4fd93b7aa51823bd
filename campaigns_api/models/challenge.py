import uuid

from sqlalchemy import JSON, Column, DateTime, Index, String, Text
from sqlalchemy.orm import relationship

from campaigns_api.database import Base
from campaigns_api.utils.datetime_utils import utcnow


class Challenge(Base):
    """
    A reusable evaluation mechanism.

    Challenges are global: they belong to no tenant and are attached to any
    tenant's campaigns through CampaignChallenge rows.
    """

    __tablename__ = "challenges"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # Use metadata_ as Python attr to avoid shadowing SQLAlchemy Base.metadata
    metadata_ = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    campaign_challenges = relationship("CampaignChallenge", back_populates="challenge", passive_deletes=True)

    __table_args__ = (Index("idx_challenge_created", "created_at"),)
