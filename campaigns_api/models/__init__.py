from .tenant import Tenant, TenantStatus
from .campaign import Campaign, CampaignStatus
from .challenge import Challenge
from .campaign_challenge import CampaignChallenge
from .participant import Participant, ParticipantStatus
from .campaign_participant import CampaignParticipant
from .participant_challenge import ParticipantChallenge

__all__ = [
    "Tenant",
    "TenantStatus",
    "Campaign",
    "CampaignStatus",
    "Challenge",
    "CampaignChallenge",
    "Participant",
    "ParticipantStatus",
    "CampaignParticipant",
    "ParticipantChallenge",
]
