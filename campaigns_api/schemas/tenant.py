from pydantic import BaseModel, ConfigDict

from campaigns_api.models.tenant import TenantStatus
from campaigns_api.schemas.common import UTCDateTime


class TenantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    status: TenantStatus
    created_at: UTCDateTime
    updated_at: UTCDateTime
