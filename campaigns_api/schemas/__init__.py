from .common import PageResponse, UTCDateTime, page_response
from .campaign import CampaignCreate, CampaignResponse, CampaignUpdate
from .challenge import ChallengeCreate, ChallengeResponse, ChallengeUpdate
from .campaign_challenge import CampaignChallengeCreate, CampaignChallengeResponse, CampaignChallengeUpdate
from .participant import (
    CampaignParticipantResponse,
    ParticipantChallengeResponse,
    ParticipantCreate,
    ParticipantResponse,
    ParticipantUpdate,
)
from .tenant import TenantResponse

# Define the public API of this module
__all__ = [
    "PageResponse",
    "UTCDateTime",
    "page_response",
    "CampaignCreate",
    "CampaignResponse",
    "CampaignUpdate",
    "ChallengeCreate",
    "ChallengeResponse",
    "ChallengeUpdate",
    "CampaignChallengeCreate",
    "CampaignChallengeResponse",
    "CampaignChallengeUpdate",
    "CampaignParticipantResponse",
    "ParticipantChallengeResponse",
    "ParticipantCreate",
    "ParticipantResponse",
    "ParticipantUpdate",
    "TenantResponse",
]
