from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from campaigns_api.schemas.common import UTCDateTime


class ChallengeCreate(BaseModel):
    name: str = Field(min_length=3, max_length=255)
    description: str | None = None
    metadata: dict[str, Any] | None = None


class ChallengeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=3, max_length=255)
    description: str | None = None
    metadata: dict[str, Any] | None = None


class ChallengeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None
    # Read from the ORM attribute; Base.metadata shadows the plain name
    metadata: dict[str, Any] | None = Field(validation_alias=AliasChoices("metadata_", "metadata"))
    created_at: UTCDateTime
    updated_at: UTCDateTime
