from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from campaigns_api.auth import get_current_tenant
from campaigns_api.database import get_db
from campaigns_api.models.tenant import Tenant
from campaigns_api.schemas.campaign_challenge import (
    CampaignChallengeCreate,
    CampaignChallengeResponse,
    CampaignChallengeUpdate,
)
from campaigns_api.schemas.common import PageResponse, page_response
from campaigns_api.services import campaign_service
from campaigns_api.utils.pagination import PaginationParams

router = APIRouter()


@router.get("/campaigns/{campaign_id}/challenges", response_model=PageResponse[CampaignChallengeResponse])
async def list_campaign_challenges(
    campaign_id: str,
    pagination: PaginationParams = Depends(),
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    page = await campaign_service.list_campaign_challenges(tenant.id, campaign_id, db, pagination.to_options())
    return page_response(page, CampaignChallengeResponse)


@router.post(
    "/campaigns/{campaign_id}/challenges",
    response_model=CampaignChallengeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_campaign_challenge(
    campaign_id: str,
    payload: CampaignChallengeCreate,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await campaign_service.create_campaign_challenge(tenant.id, campaign_id, payload, db)


@router.get("/campaigns/{campaign_id}/challenges/{campaign_challenge_id}", response_model=CampaignChallengeResponse)
async def get_campaign_challenge(
    campaign_id: str,
    campaign_challenge_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await campaign_service.get_campaign_challenge_or_raise(tenant.id, campaign_id, campaign_challenge_id, db)


@router.api_route(
    "/campaigns/{campaign_id}/challenges/{campaign_challenge_id}",
    methods=["PUT", "PATCH"],
    response_model=CampaignChallengeResponse,
)
async def update_campaign_challenge(
    campaign_id: str,
    campaign_challenge_id: str,
    payload: CampaignChallengeUpdate,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await campaign_service.update_campaign_challenge(
        tenant.id, campaign_id, campaign_challenge_id, payload, db
    )


@router.delete(
    "/campaigns/{campaign_id}/challenges/{campaign_challenge_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_campaign_challenge(
    campaign_id: str,
    campaign_challenge_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    await campaign_service.delete_campaign_challenge(tenant.id, campaign_id, campaign_challenge_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
