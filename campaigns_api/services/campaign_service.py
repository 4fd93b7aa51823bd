"""
Campaign Service

Tenant-scoped campaign CRUD and the campaign-challenge associations that
attach global challenges to a campaign.

Every query narrows on the caller's tenant id. A campaign owned by another
tenant is reported exactly like a missing one.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from campaigns_api.exceptions import (
    CampaignChallengeNotFoundError,
    CampaignNotFoundError,
    FieldError,
    ValidationError,
)
from campaigns_api.models.campaign import Campaign
from campaigns_api.models.campaign_challenge import CampaignChallenge
from campaigns_api.models.campaign_participant import CampaignParticipant
from campaigns_api.models.challenge import Challenge
from campaigns_api.models.participant_challenge import ParticipantChallenge
from campaigns_api.schemas.campaign import CampaignCreate, CampaignUpdate, validate_date_order
from campaigns_api.schemas.campaign_challenge import (
    CampaignChallengeCreate,
    CampaignChallengeUpdate,
    validate_evaluation_frequency,
)
from campaigns_api.utils.db_helpers import commit_or_raise
from campaigns_api.utils.pagination import Page, PaginationOptions, paginate

logger = logging.getLogger(__name__)

CAMPAIGN_UPDATABLE_FIELDS = ("name", "description", "start_time", "end_time", "status")
CAMPAIGN_REQUIRED_FIELDS = ("name", "status")

CAMPAIGN_CHALLENGE_UPDATABLE_FIELDS = (
    "display_name",
    "display_description",
    "evaluation_frequency",
    "reward_points",
    "configuration",
)
CAMPAIGN_CHALLENGE_REQUIRED_FIELDS = ("display_name", "evaluation_frequency", "reward_points")


def reject_nulls(updates: dict, required: tuple[str, ...]) -> list[FieldError]:
    """Explicit nulls are not allowed for columns that must always hold a value."""
    return [
        FieldError(field=name, message="can't be blank", rule="required")
        for name in required
        if name in updates and updates[name] is None
    ]


def _enum_value(value):
    return getattr(value, "value", value)


# ============================================================================
# Campaigns
# ============================================================================


async def list_campaigns(tenant_id: str, db: AsyncSession, options: PaginationOptions | None = None) -> Page:
    """Return one page of the tenant's campaigns."""
    return await paginate(db, Campaign, options, filters=[Campaign.tenant_id == tenant_id])


async def get_campaign(tenant_id: str, campaign_id: str, db: AsyncSession) -> Campaign | None:
    """Return the campaign if it exists and belongs to the tenant, else None."""
    result = await db.execute(select(Campaign).where(Campaign.id == campaign_id, Campaign.tenant_id == tenant_id))
    return result.scalars().first()


async def get_campaign_or_raise(tenant_id: str, campaign_id: str, db: AsyncSession) -> Campaign:
    campaign = await get_campaign(tenant_id, campaign_id, db)
    if campaign is None:
        raise CampaignNotFoundError(campaign_id)
    return campaign


async def create_campaign(tenant_id: str, payload: CampaignCreate, db: AsyncSession) -> Campaign:
    """
    Create a campaign owned by the tenant.

    Raises ValidationError when the date range is inverted or the tenant row
    no longer exists.
    """
    errors = validate_date_order(payload.start_time, payload.end_time)
    if errors:
        raise ValidationError(errors)

    campaign = Campaign(
        tenant_id=tenant_id,
        name=payload.name,
        description=payload.description,
        start_time=payload.start_time,
        end_time=payload.end_time,
        status=_enum_value(payload.status),
    )
    db.add(campaign)
    await commit_or_raise(
        db,
        unique_error=FieldError(field="id", message="has already been taken", rule="unique"),
        foreign_key_error=FieldError(field="tenant_id", message="does not exist", rule="foreign_key"),
    )
    await db.refresh(campaign)
    logger.info("Campaign created: id=%s tenant=%s", campaign.id, tenant_id)
    return campaign


async def update_campaign(tenant_id: str, campaign_id: str, payload: CampaignUpdate, db: AsyncSession) -> Campaign:
    """
    Apply a partial update to a tenant's campaign.

    The date-order rule is checked against the merged record, so moving only
    one bound still cannot invert the range.
    """
    campaign = await get_campaign_or_raise(tenant_id, campaign_id, db)
    updates = payload.model_dump(exclude_unset=True)

    errors = reject_nulls(updates, CAMPAIGN_REQUIRED_FIELDS)
    errors += validate_date_order(
        updates.get("start_time", campaign.start_time),
        updates.get("end_time", campaign.end_time),
    )
    if errors:
        raise ValidationError(errors)

    for field in CAMPAIGN_UPDATABLE_FIELDS:
        if field in updates:
            setattr(campaign, field, _enum_value(updates[field]))

    await commit_or_raise(db, unique_error=FieldError(field="id", message="has already been taken", rule="unique"))
    await db.refresh(campaign)
    return campaign


async def delete_campaign(tenant_id: str, campaign_id: str, db: AsyncSession) -> Campaign:
    """
    Hard-delete a campaign together with every association row referencing it.

    Dependents and parent are removed in one transaction.
    """
    campaign = await get_campaign_or_raise(tenant_id, campaign_id, db)

    for association in (ParticipantChallenge, CampaignParticipant, CampaignChallenge):
        await db.execute(
            delete(association)
            .where(association.campaign_id == campaign.id)
            .execution_options(synchronize_session=False)
        )
    await db.delete(campaign)
    await db.commit()
    logger.info("Campaign deleted: id=%s tenant=%s", campaign.id, tenant_id)
    return campaign


# ============================================================================
# Campaign challenges
# ============================================================================


def _campaign_challenge_query():
    return select(CampaignChallenge).join(Campaign, CampaignChallenge.campaign_id == Campaign.id)


async def list_campaign_challenges(
    tenant_id: str,
    campaign_id: str,
    db: AsyncSession,
    options: PaginationOptions | None = None,
) -> Page:
    """Return one page of the challenges attached to a tenant's campaign."""
    await get_campaign_or_raise(tenant_id, campaign_id, db)
    return await paginate(
        db,
        CampaignChallenge,
        options,
        query=_campaign_challenge_query(),
        filters=[Campaign.tenant_id == tenant_id, CampaignChallenge.campaign_id == campaign_id],
    )


async def get_campaign_challenge(
    tenant_id: str,
    campaign_id: str,
    campaign_challenge_id: str,
    db: AsyncSession,
) -> CampaignChallenge | None:
    result = await db.execute(
        _campaign_challenge_query().where(
            Campaign.tenant_id == tenant_id,
            CampaignChallenge.campaign_id == campaign_id,
            CampaignChallenge.id == campaign_challenge_id,
        )
    )
    return result.scalars().first()


async def get_campaign_challenge_or_raise(
    tenant_id: str,
    campaign_id: str,
    campaign_challenge_id: str,
    db: AsyncSession,
) -> CampaignChallenge:
    campaign_challenge = await get_campaign_challenge(tenant_id, campaign_id, campaign_challenge_id, db)
    if campaign_challenge is None:
        raise CampaignChallengeNotFoundError(campaign_challenge_id)
    return campaign_challenge


async def create_campaign_challenge(
    tenant_id: str,
    campaign_id: str,
    payload: CampaignChallengeCreate,
    db: AsyncSession,
) -> CampaignChallenge:
    """
    Attach a global challenge to one of the tenant's campaigns.

    The campaign must resolve under the tenant (else CampaignNotFoundError);
    the challenge is looked up globally. A second association for the same
    (campaign, challenge) pair is a ValidationError.
    """
    await get_campaign_or_raise(tenant_id, campaign_id, db)

    errors = validate_evaluation_frequency(payload.evaluation_frequency)
    challenge = await db.get(Challenge, payload.challenge_id)
    if challenge is None:
        errors.append(FieldError(field="challenge_id", message="does not exist", rule="foreign_key"))
    if errors:
        raise ValidationError(errors)

    campaign_challenge = CampaignChallenge(
        campaign_id=campaign_id,
        challenge_id=payload.challenge_id,
        display_name=payload.display_name,
        display_description=payload.display_description,
        evaluation_frequency=payload.evaluation_frequency,
        reward_points=payload.reward_points,
        configuration=payload.configuration,
    )
    db.add(campaign_challenge)
    await commit_or_raise(
        db,
        unique_error=FieldError(field="campaign_id", message="has already been taken", rule="unique"),
        foreign_key_error=FieldError(field="challenge_id", message="does not exist", rule="foreign_key"),
    )
    await db.refresh(campaign_challenge)
    logger.info(
        "Challenge %s attached to campaign %s (tenant=%s)",
        campaign_challenge.challenge_id,
        campaign_id,
        tenant_id,
    )
    return campaign_challenge


async def update_campaign_challenge(
    tenant_id: str,
    campaign_id: str,
    campaign_challenge_id: str,
    payload: CampaignChallengeUpdate,
    db: AsyncSession,
) -> CampaignChallenge:
    campaign_challenge = await get_campaign_challenge_or_raise(tenant_id, campaign_id, campaign_challenge_id, db)
    updates = payload.model_dump(exclude_unset=True)

    errors = reject_nulls(updates, CAMPAIGN_CHALLENGE_REQUIRED_FIELDS)
    errors += validate_evaluation_frequency(updates.get("evaluation_frequency"))
    if errors:
        raise ValidationError(errors)

    for field in CAMPAIGN_CHALLENGE_UPDATABLE_FIELDS:
        if field in updates:
            setattr(campaign_challenge, field, updates[field])

    await db.commit()
    await db.refresh(campaign_challenge)
    return campaign_challenge


async def delete_campaign_challenge(
    tenant_id: str,
    campaign_id: str,
    campaign_challenge_id: str,
    db: AsyncSession,
) -> CampaignChallenge:
    """
    Detach a challenge from a campaign.

    Participant assignments that qualified through this campaign go with it.
    """
    campaign_challenge = await get_campaign_challenge_or_raise(tenant_id, campaign_id, campaign_challenge_id, db)

    await db.execute(
        delete(ParticipantChallenge)
        .where(
            ParticipantChallenge.campaign_id == campaign_challenge.campaign_id,
            ParticipantChallenge.challenge_id == campaign_challenge.challenge_id,
        )
        .execution_options(synchronize_session=False)
    )
    await db.delete(campaign_challenge)
    await db.commit()
    logger.info("Campaign challenge deleted: id=%s tenant=%s", campaign_challenge.id, tenant_id)
    return campaign_challenge
