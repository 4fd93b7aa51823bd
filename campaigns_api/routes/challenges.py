from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from campaigns_api.auth import get_current_tenant
from campaigns_api.database import get_db
from campaigns_api.models.tenant import Tenant
from campaigns_api.schemas.challenge import ChallengeCreate, ChallengeResponse, ChallengeUpdate
from campaigns_api.schemas.common import PageResponse, page_response
from campaigns_api.schemas.participant import ParticipantResponse
from campaigns_api.services import challenge_service, participant_service
from campaigns_api.utils.pagination import PaginationParams

# Challenges are global, but callers still pass the access gate
router = APIRouter(dependencies=[Depends(get_current_tenant)])


@router.get("/challenges", response_model=PageResponse[ChallengeResponse])
async def list_challenges(pagination: PaginationParams = Depends(), db: AsyncSession = Depends(get_db)):
    page = await challenge_service.list_challenges(db, pagination.to_options())
    return page_response(page, ChallengeResponse)


@router.post("/challenges", response_model=ChallengeResponse, status_code=status.HTTP_201_CREATED)
async def create_challenge(payload: ChallengeCreate, db: AsyncSession = Depends(get_db)):
    return await challenge_service.create_challenge(payload, db)


@router.get("/challenges/{challenge_id}", response_model=ChallengeResponse)
async def get_challenge(challenge_id: str, db: AsyncSession = Depends(get_db)):
    return await challenge_service.get_challenge_or_raise(challenge_id, db)


@router.api_route("/challenges/{challenge_id}", methods=["PUT", "PATCH"], response_model=ChallengeResponse)
async def update_challenge(challenge_id: str, payload: ChallengeUpdate, db: AsyncSession = Depends(get_db)):
    return await challenge_service.update_challenge(challenge_id, payload, db)


@router.delete("/challenges/{challenge_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_challenge(challenge_id: str, db: AsyncSession = Depends(get_db)):
    await challenge_service.delete_challenge(challenge_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/challenges/{challenge_id}/participants", response_model=PageResponse[ParticipantResponse])
async def list_challenge_participants(
    challenge_id: str,
    pagination: PaginationParams = Depends(),
    tenant: Tenant = Depends(get_current_tenant),
    db: AsyncSession = Depends(get_db),
):
    page = await participant_service.list_participants_for_challenge(
        tenant.id, challenge_id, db, pagination.to_options()
    )
    return page_response(page, ParticipantResponse)
