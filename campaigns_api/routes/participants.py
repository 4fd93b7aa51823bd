from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from campaigns_api.auth import get_current_tenant
from campaigns_api.database import get_db
from campaigns_api.models.tenant import Tenant
from campaigns_api.schemas.campaign import CampaignResponse
from campaigns_api.schemas.challenge import ChallengeResponse
from campaigns_api.schemas.common import PageResponse, page_response
from campaigns_api.schemas.participant import (
    CampaignParticipantResponse,
    ParticipantChallengeResponse,
    ParticipantCreate,
    ParticipantResponse,
    ParticipantUpdate,
)
from campaigns_api.services import participant_service
from campaigns_api.utils.pagination import PaginationParams

router = APIRouter()


@router.get("/participants", response_model=PageResponse[ParticipantResponse])
async def list_participants(
    nickname: str | None = Query(default=None, description="Case-insensitive nickname substring"),
    pagination: PaginationParams = Depends(),
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    page = await participant_service.list_participants(tenant.id, db, pagination.to_options(), nickname=nickname)
    return page_response(page, ParticipantResponse)


@router.post("/participants", response_model=ParticipantResponse, status_code=status.HTTP_201_CREATED)
async def create_participant(
    payload: ParticipantCreate,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await participant_service.create_participant(tenant.id, payload, db)


@router.get("/participants/{participant_id}", response_model=ParticipantResponse)
async def get_participant(
    participant_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await participant_service.get_participant_or_raise(tenant.id, participant_id, db)


@router.api_route("/participants/{participant_id}", methods=["PUT", "PATCH"], response_model=ParticipantResponse)
async def update_participant(
    participant_id: str,
    payload: ParticipantUpdate,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await participant_service.update_participant(tenant.id, participant_id, payload, db)


@router.delete("/participants/{participant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_participant(
    participant_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    await participant_service.delete_participant(tenant.id, participant_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Campaign enrolment ─────────────────────────────────────────────────────────


@router.get("/participants/{participant_id}/campaigns", response_model=PageResponse[CampaignResponse])
async def list_participant_campaigns(
    participant_id: str,
    pagination: PaginationParams = Depends(),
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    page = await participant_service.list_campaigns_for_participant(
        tenant.id, participant_id, db, pagination.to_options()
    )
    return page_response(page, CampaignResponse)


@router.post(
    "/participants/{participant_id}/campaigns/{campaign_id}",
    response_model=CampaignParticipantResponse,
    status_code=status.HTTP_201_CREATED,
)
async def associate_campaign(
    participant_id: str,
    campaign_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await participant_service.associate_participant_with_campaign(tenant.id, participant_id, campaign_id, db)


@router.delete("/participants/{participant_id}/campaigns/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
async def disassociate_campaign(
    participant_id: str,
    campaign_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    await participant_service.disassociate_participant_from_campaign(tenant.id, participant_id, campaign_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Challenge assignment ───────────────────────────────────────────────────────


@router.get("/participants/{participant_id}/challenges", response_model=PageResponse[ChallengeResponse])
async def list_participant_challenges(
    participant_id: str,
    campaign_id: str | None = Query(default=None, description="Only challenges earned through this campaign"),
    pagination: PaginationParams = Depends(),
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    page = await participant_service.list_challenges_for_participant(
        tenant.id, participant_id, db, pagination.to_options(), campaign_id=campaign_id
    )
    return page_response(page, ChallengeResponse)


@router.post(
    "/participants/{participant_id}/challenges/{challenge_id}",
    response_model=ParticipantChallengeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def associate_challenge(
    participant_id: str,
    challenge_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await participant_service.associate_participant_with_challenge(tenant.id, participant_id, challenge_id, db)


@router.delete("/participants/{participant_id}/challenges/{challenge_id}", status_code=status.HTTP_204_NO_CONTENT)
async def disassociate_challenge(
    participant_id: str,
    challenge_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    await participant_service.disassociate_participant_from_challenge(tenant.id, participant_id, challenge_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
