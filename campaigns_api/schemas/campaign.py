from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from campaigns_api.exceptions import FieldError
from campaigns_api.models.campaign import CampaignStatus
from campaigns_api.schemas.common import UTCDateTime
from campaigns_api.utils.datetime_utils import to_naive_utc


class CampaignCreate(BaseModel):
    name: str = Field(min_length=3, max_length=255)
    description: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: CampaignStatus = CampaignStatus.active

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_to_utc(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)


class CampaignUpdate(BaseModel):
    """Partial update; only fields present in the payload are applied."""

    name: str | None = Field(default=None, min_length=3, max_length=255)
    description: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: CampaignStatus | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_to_utc(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)


class CampaignResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    description: str | None
    start_time: UTCDateTime | None
    end_time: UTCDateTime | None
    status: CampaignStatus
    created_at: UTCDateTime
    updated_at: UTCDateTime


def validate_date_order(start_time: datetime | None, end_time: datetime | None) -> list[FieldError]:
    """A campaign with both bounds must start strictly before it ends."""
    if start_time is not None and end_time is not None and start_time >= end_time:
        return [FieldError(field="start_time", message="must be before end_time", rule="date_order")]
    return []
