"""
Participant Service

Tenant-scoped participants and their enrolment in campaigns and challenges.

Association rules:
    - A participant may join only campaigns of its own tenant.
    - A participant may take a challenge only when the challenge is attached
      to a campaign of the tenant that the participant is enrolled in. The
      qualifying campaign is recorded on the assignment.
    - Leaving a campaign drops the challenge assignments earned through it.
"""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from campaigns_api.exceptions import (
    AssociationNotFoundError,
    FieldError,
    ParticipantNotFoundError,
    ParticipantNotInCampaignError,
    TenantMismatchError,
    ValidationError,
)
from campaigns_api.models.campaign import Campaign
from campaigns_api.models.campaign_challenge import CampaignChallenge
from campaigns_api.models.campaign_participant import CampaignParticipant
from campaigns_api.models.challenge import Challenge
from campaigns_api.models.participant import Participant
from campaigns_api.models.participant_challenge import ParticipantChallenge
from campaigns_api.schemas.participant import ParticipantCreate, ParticipantUpdate
from campaigns_api.services.campaign_service import get_campaign, get_campaign_or_raise, reject_nulls
from campaigns_api.utils.db_helpers import commit_or_raise
from campaigns_api.utils.pagination import Page, PaginationOptions, paginate

logger = logging.getLogger(__name__)

PARTICIPANT_UPDATABLE_FIELDS = ("name", "nickname", "status")

NICKNAME_TAKEN = FieldError(field="nickname", message="has already been taken", rule="unique")
ALREADY_ASSOCIATED = FieldError(field="participant_id", message="has already been taken", rule="unique")
CAMPAIGN_GONE = FieldError(field="campaign_id", message="does not exist", rule="foreign_key")


# ============================================================================
# Participants
# ============================================================================


async def list_participants(
    tenant_id: str,
    db: AsyncSession,
    options: PaginationOptions | None = None,
    nickname: str | None = None,
) -> Page:
    """
    Return one page of the tenant's participants.

    ``nickname`` narrows the listing to case-insensitive substring matches.
    """
    filters = [Participant.tenant_id == tenant_id]
    if nickname:
        filters.append(func.lower(Participant.nickname).contains(nickname.lower(), autoescape=True))
    return await paginate(db, Participant, options, filters=filters)


async def get_participant(tenant_id: str, participant_id: str, db: AsyncSession) -> Participant | None:
    result = await db.execute(
        select(Participant).where(Participant.id == participant_id, Participant.tenant_id == tenant_id)
    )
    return result.scalars().first()


async def get_participant_or_raise(tenant_id: str, participant_id: str, db: AsyncSession) -> Participant:
    participant = await get_participant(tenant_id, participant_id, db)
    if participant is None:
        raise ParticipantNotFoundError(participant_id)
    return participant


async def create_participant(tenant_id: str, payload: ParticipantCreate, db: AsyncSession) -> Participant:
    """Create a participant; nicknames are unique within the tenant."""
    participant = Participant(
        tenant_id=tenant_id,
        name=payload.name,
        nickname=payload.nickname,
        status=payload.status.value,
    )
    db.add(participant)
    await commit_or_raise(
        db,
        unique_error=NICKNAME_TAKEN,
        foreign_key_error=FieldError(field="tenant_id", message="does not exist", rule="foreign_key"),
    )
    await db.refresh(participant)
    logger.info("Participant created: id=%s tenant=%s", participant.id, tenant_id)
    return participant


async def update_participant(
    tenant_id: str,
    participant_id: str,
    payload: ParticipantUpdate,
    db: AsyncSession,
) -> Participant:
    participant = await get_participant_or_raise(tenant_id, participant_id, db)
    updates = payload.model_dump(exclude_unset=True)

    errors = reject_nulls(updates, PARTICIPANT_UPDATABLE_FIELDS)
    if errors:
        raise ValidationError(errors)

    for field in PARTICIPANT_UPDATABLE_FIELDS:
        if field in updates:
            setattr(participant, field, getattr(updates[field], "value", updates[field]))

    await commit_or_raise(db, unique_error=NICKNAME_TAKEN)
    await db.refresh(participant)
    return participant


async def delete_participant(tenant_id: str, participant_id: str, db: AsyncSession) -> Participant:
    """Delete a participant and all of its campaign and challenge associations."""
    participant = await get_participant_or_raise(tenant_id, participant_id, db)

    for association in (ParticipantChallenge, CampaignParticipant):
        await db.execute(
            delete(association)
            .where(association.participant_id == participant.id)
            .execution_options(synchronize_session=False)
        )
    await db.delete(participant)
    await db.commit()
    logger.info("Participant deleted: id=%s tenant=%s", participant.id, tenant_id)
    return participant


# ============================================================================
# Campaign enrolment
# ============================================================================


async def associate_participant_with_campaign(
    tenant_id: str,
    participant_id: str,
    campaign_id: str,
    db: AsyncSession,
) -> CampaignParticipant:
    """
    Enrol a participant in a campaign.

    Raises TenantMismatchError unless both resolve under the tenant, and
    ValidationError when the participant is already enrolled.
    """
    participant = await get_participant(tenant_id, participant_id, db)
    campaign = await get_campaign(tenant_id, campaign_id, db)
    if participant is None or campaign is None:
        logger.info(
            "Rejected enrolment of participant %s in campaign %s for tenant %s",
            participant_id,
            campaign_id,
            tenant_id,
        )
        raise TenantMismatchError(details={"participant_id": participant_id, "campaign_id": campaign_id})

    enrolment = CampaignParticipant(participant_id=participant.id, campaign_id=campaign.id)
    db.add(enrolment)
    await commit_or_raise(db, unique_error=ALREADY_ASSOCIATED, foreign_key_error=CAMPAIGN_GONE)
    await db.refresh(enrolment)
    return enrolment


async def disassociate_participant_from_campaign(
    tenant_id: str,
    participant_id: str,
    campaign_id: str,
    db: AsyncSession,
) -> CampaignParticipant:
    """Remove an enrolment along with the challenge assignments it qualified."""
    result = await db.execute(
        select(CampaignParticipant)
        .join(Participant, CampaignParticipant.participant_id == Participant.id)
        .where(
            CampaignParticipant.participant_id == participant_id,
            CampaignParticipant.campaign_id == campaign_id,
            Participant.tenant_id == tenant_id,
        )
    )
    enrolment = result.scalars().first()
    if enrolment is None:
        raise AssociationNotFoundError()

    await db.execute(
        delete(ParticipantChallenge)
        .where(
            ParticipantChallenge.participant_id == participant_id,
            ParticipantChallenge.campaign_id == campaign_id,
        )
        .execution_options(synchronize_session=False)
    )
    await db.delete(enrolment)
    await db.commit()
    return enrolment


async def list_campaigns_for_participant(
    tenant_id: str,
    participant_id: str,
    db: AsyncSession,
    options: PaginationOptions | None = None,
) -> Page:
    await get_participant_or_raise(tenant_id, participant_id, db)
    return await paginate(
        db,
        Campaign,
        options,
        query=select(Campaign).join(CampaignParticipant, CampaignParticipant.campaign_id == Campaign.id),
        filters=[CampaignParticipant.participant_id == participant_id, Campaign.tenant_id == tenant_id],
    )


async def list_participants_for_campaign(
    tenant_id: str,
    campaign_id: str,
    db: AsyncSession,
    options: PaginationOptions | None = None,
) -> Page:
    await get_campaign_or_raise(tenant_id, campaign_id, db)
    return await paginate(
        db,
        Participant,
        options,
        query=select(Participant).join(CampaignParticipant, CampaignParticipant.participant_id == Participant.id),
        filters=[CampaignParticipant.campaign_id == campaign_id, Participant.tenant_id == tenant_id],
    )


# ============================================================================
# Challenge assignment
# ============================================================================


async def associate_participant_with_challenge(
    tenant_id: str,
    participant_id: str,
    challenge_id: str,
    db: AsyncSession,
) -> ParticipantChallenge:
    """
    Assign a challenge to a participant.

    Raises:
        TenantMismatchError: the participant is not in the tenant, or no
            campaign of the tenant offers the challenge
        ParticipantNotInCampaignError: the participant is enrolled in none
            of the campaigns offering the challenge
        ValidationError: the challenge is already assigned
    """
    participant = await get_participant(tenant_id, participant_id, db)
    if participant is None:
        raise TenantMismatchError(details={"participant_id": participant_id, "challenge_id": challenge_id})

    offering_campaigns = (
        select(CampaignChallenge.campaign_id)
        .join(Campaign, CampaignChallenge.campaign_id == Campaign.id)
        .where(CampaignChallenge.challenge_id == challenge_id, Campaign.tenant_id == tenant_id)
    )
    result = await db.execute(offering_campaigns)
    campaign_ids = list(result.scalars().all())
    if not campaign_ids:
        raise TenantMismatchError(details={"participant_id": participant_id, "challenge_id": challenge_id})

    result = await db.execute(
        select(CampaignParticipant.campaign_id)
        .where(
            CampaignParticipant.participant_id == participant_id,
            CampaignParticipant.campaign_id.in_(campaign_ids),
        )
        .order_by(CampaignParticipant.created_at, CampaignParticipant.id)
        .limit(1)
    )
    qualifying_campaign_id = result.scalars().first()
    if qualifying_campaign_id is None:
        raise ParticipantNotInCampaignError(participant_id, challenge_id)

    assignment = ParticipantChallenge(
        participant_id=participant_id,
        challenge_id=challenge_id,
        campaign_id=qualifying_campaign_id,
    )
    db.add(assignment)
    await commit_or_raise(db, unique_error=ALREADY_ASSOCIATED, foreign_key_error=CAMPAIGN_GONE)
    await db.refresh(assignment)
    logger.info(
        "Challenge %s assigned to participant %s via campaign %s",
        challenge_id,
        participant_id,
        qualifying_campaign_id,
    )
    return assignment


async def disassociate_participant_from_challenge(
    tenant_id: str,
    participant_id: str,
    challenge_id: str,
    db: AsyncSession,
) -> ParticipantChallenge:
    result = await db.execute(
        select(ParticipantChallenge)
        .join(Participant, ParticipantChallenge.participant_id == Participant.id)
        .where(
            ParticipantChallenge.participant_id == participant_id,
            ParticipantChallenge.challenge_id == challenge_id,
            Participant.tenant_id == tenant_id,
        )
    )
    assignment = result.scalars().first()
    if assignment is None:
        raise AssociationNotFoundError()

    await db.delete(assignment)
    await db.commit()
    return assignment


async def list_challenges_for_participant(
    tenant_id: str,
    participant_id: str,
    db: AsyncSession,
    options: PaginationOptions | None = None,
    campaign_id: str | None = None,
) -> Page:
    """Challenges assigned to a participant, optionally only those earned through one campaign."""
    await get_participant_or_raise(tenant_id, participant_id, db)
    filters = [ParticipantChallenge.participant_id == participant_id]
    if campaign_id is not None:
        filters.append(ParticipantChallenge.campaign_id == campaign_id)
    return await paginate(
        db,
        Challenge,
        options,
        query=select(Challenge).join(ParticipantChallenge, ParticipantChallenge.challenge_id == Challenge.id),
        filters=filters,
    )


async def list_participants_for_challenge(
    tenant_id: str,
    challenge_id: str,
    db: AsyncSession,
    options: PaginationOptions | None = None,
) -> Page:
    """The tenant's participants holding a challenge; other tenants' holders are never listed."""
    return await paginate(
        db,
        Participant,
        options,
        query=select(Participant).join(ParticipantChallenge, ParticipantChallenge.participant_id == Participant.id),
        filters=[ParticipantChallenge.challenge_id == challenge_id, Participant.tenant_id == tenant_id],
    )
