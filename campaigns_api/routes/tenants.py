from fastapi import APIRouter, Depends

from campaigns_api.auth import get_current_tenant
from campaigns_api.models.tenant import Tenant
from campaigns_api.schemas.tenant import TenantResponse

router = APIRouter()


@router.get("/tenant", response_model=TenantResponse)
async def get_tenant(tenant: Tenant = Depends(get_current_tenant)):
    """The tenant resolved from the bearer token, provisioned on first contact."""
    return tenant
