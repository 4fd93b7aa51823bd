import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, UniqueConstraint

from campaigns_api.database import Base
from campaigns_api.utils.datetime_utils import utcnow


class ParticipantChallenge(Base):
    """
    Assignment of a challenge to a participant.

    ``campaign_id`` records the campaign through which the participant
    qualifies for the challenge.
    """

    __tablename__ = "participant_challenges"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    participant_id = Column(String(36), ForeignKey("participants.id", ondelete="CASCADE"), nullable=False)
    challenge_id = Column(String(36), ForeignKey("challenges.id", ondelete="CASCADE"), nullable=False)
    campaign_id = Column(String(36), ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("participant_id", "challenge_id", name="uq_participant_challenges_participant_challenge"),
        Index("idx_participant_challenge_campaign", "campaign_id"),
        Index("idx_participant_challenge_challenge", "challenge_id"),
    )
