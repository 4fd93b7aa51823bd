import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, UniqueConstraint

from campaigns_api.database import Base
from campaigns_api.utils.datetime_utils import utcnow


class CampaignParticipant(Base):
    """Enrolment of a participant in a campaign of the same tenant."""

    __tablename__ = "campaign_participants"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    participant_id = Column(String(36), ForeignKey("participants.id", ondelete="CASCADE"), nullable=False)
    campaign_id = Column(String(36), ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("participant_id", "campaign_id", name="uq_campaign_participants_participant_campaign"),
        Index("idx_campaign_participant_campaign", "campaign_id"),
    )
