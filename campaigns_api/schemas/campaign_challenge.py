from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from campaigns_api.exceptions import FieldError
from campaigns_api.models.campaign_challenge import FREQUENCY_KEYWORDS
from campaigns_api.schemas.common import UTCDateTime


class CampaignChallengeCreate(BaseModel):
    challenge_id: str
    display_name: str = Field(min_length=3, max_length=255)
    display_description: str | None = None
    evaluation_frequency: str = Field(min_length=1, max_length=100)
    reward_points: StrictInt
    configuration: dict[str, Any] | None = None


class CampaignChallengeUpdate(BaseModel):
    display_name: str | None = Field(default=None, min_length=3, max_length=255)
    display_description: str | None = None
    evaluation_frequency: str | None = Field(default=None, min_length=1, max_length=100)
    reward_points: StrictInt | None = None
    configuration: dict[str, Any] | None = None


class CampaignChallengeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    campaign_id: str
    challenge_id: str
    display_name: str
    display_description: str | None
    evaluation_frequency: str
    reward_points: int
    configuration: dict[str, Any] | None
    created_at: UTCDateTime
    updated_at: UTCDateTime


def is_cron_expression(expression: str) -> bool:
    return len(expression.split(" ")) == 5


def validate_evaluation_frequency(frequency: str | None) -> list[FieldError]:
    """Accept a cadence keyword or a five-field cron expression."""
    if frequency is None or frequency in FREQUENCY_KEYWORDS or is_cron_expression(frequency):
        return []
    return [
        FieldError(
            field="evaluation_frequency",
            message=f"must be a valid cron expression or one of: {', '.join(FREQUENCY_KEYWORDS)}",
            rule="frequency",
        )
    ]
