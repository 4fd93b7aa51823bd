from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from campaigns_api.auth import get_current_tenant
from campaigns_api.database import get_db
from campaigns_api.models.tenant import Tenant
from campaigns_api.schemas.campaign import CampaignCreate, CampaignResponse, CampaignUpdate
from campaigns_api.schemas.common import PageResponse, page_response
from campaigns_api.schemas.participant import ParticipantResponse
from campaigns_api.services import campaign_service, participant_service
from campaigns_api.utils.pagination import PaginationParams

router = APIRouter()


@router.get("/campaigns", response_model=PageResponse[CampaignResponse])
async def list_campaigns(
    pagination: PaginationParams = Depends(),
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    page = await campaign_service.list_campaigns(tenant.id, db, pagination.to_options())
    return page_response(page, CampaignResponse)


@router.post("/campaigns", response_model=CampaignResponse, status_code=status.HTTP_201_CREATED)
async def create_campaign(
    payload: CampaignCreate,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await campaign_service.create_campaign(tenant.id, payload, db)


@router.get("/campaigns/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(
    campaign_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await campaign_service.get_campaign_or_raise(tenant.id, campaign_id, db)


@router.api_route("/campaigns/{campaign_id}", methods=["PUT", "PATCH"], response_model=CampaignResponse)
async def update_campaign(
    campaign_id: str,
    payload: CampaignUpdate,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await campaign_service.update_campaign(tenant.id, campaign_id, payload, db)


@router.delete("/campaigns/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_campaign(
    campaign_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    await campaign_service.delete_campaign(tenant.id, campaign_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/campaigns/{campaign_id}/participants", response_model=PageResponse[ParticipantResponse])
async def list_campaign_participants(
    campaign_id: str,
    pagination: PaginationParams = Depends(),
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    page = await participant_service.list_participants_for_campaign(tenant.id, campaign_id, db, pagination.to_options())
    return page_response(page, ParticipantResponse)
