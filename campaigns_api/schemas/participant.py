from pydantic import BaseModel, ConfigDict, Field

from campaigns_api.models.participant import ParticipantStatus
from campaigns_api.schemas.common import UTCDateTime


class ParticipantCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    nickname: str = Field(min_length=3, max_length=255)
    status: ParticipantStatus = ParticipantStatus.active


class ParticipantUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    nickname: str | None = Field(default=None, min_length=3, max_length=255)
    status: ParticipantStatus | None = None


class ParticipantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    nickname: str
    status: ParticipantStatus
    created_at: UTCDateTime
    updated_at: UTCDateTime


class CampaignParticipantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    participant_id: str
    campaign_id: str
    created_at: UTCDateTime
    updated_at: UTCDateTime


class ParticipantChallengeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    participant_id: str
    challenge_id: str
    campaign_id: str
    created_at: UTCDateTime
    updated_at: UTCDateTime
