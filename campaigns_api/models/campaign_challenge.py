import uuid

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from campaigns_api.database import Base
from campaigns_api.utils.datetime_utils import utcnow

FREQUENCY_KEYWORDS = ("daily", "weekly", "monthly", "on_event")


class CampaignChallenge(Base):
    """A challenge attached to a campaign, with campaign-specific configuration."""

    __tablename__ = "campaign_challenges"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    campaign_id = Column(String(36), ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False)
    challenge_id = Column(String(36), ForeignKey("challenges.id"), nullable=False)
    display_name = Column(String(255), nullable=False)
    display_description = Column(Text, nullable=True)
    evaluation_frequency = Column(String(100), nullable=False)
    reward_points = Column(Integer, nullable=False)
    configuration = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    campaign = relationship("Campaign", back_populates="campaign_challenges")
    challenge = relationship("Challenge", back_populates="campaign_challenges")

    __table_args__ = (
        UniqueConstraint("campaign_id", "challenge_id", name="uq_campaign_challenges_campaign_challenge"),
        Index("idx_campaign_challenge_challenge", "challenge_id"),
    )
