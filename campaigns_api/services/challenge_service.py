"""
Challenge Service

Challenges are a global catalog shared by every tenant. Tenants customize
them per campaign through campaign challenges.
"""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campaigns_api.exceptions import ChallengeNotFoundError, HasAssociationsError, ValidationError
from campaigns_api.models.campaign_challenge import CampaignChallenge
from campaigns_api.models.challenge import Challenge
from campaigns_api.models.participant_challenge import ParticipantChallenge
from campaigns_api.schemas.challenge import ChallengeCreate, ChallengeUpdate
from campaigns_api.utils.pagination import Page, PaginationOptions, paginate

logger = logging.getLogger(__name__)


async def list_challenges(db: AsyncSession, options: PaginationOptions | None = None) -> Page:
    return await paginate(db, Challenge, options)


async def get_challenge(challenge_id: str, db: AsyncSession) -> Challenge | None:
    result = await db.execute(select(Challenge).where(Challenge.id == challenge_id))
    return result.scalars().first()


async def get_challenge_or_raise(challenge_id: str, db: AsyncSession) -> Challenge:
    challenge = await get_challenge(challenge_id, db)
    if challenge is None:
        raise ChallengeNotFoundError(challenge_id)
    return challenge


async def create_challenge(payload: ChallengeCreate, db: AsyncSession) -> Challenge:
    challenge = Challenge(name=payload.name, description=payload.description, metadata_=payload.metadata)
    db.add(challenge)
    await db.commit()
    await db.refresh(challenge)
    logger.info("Challenge created: id=%s", challenge.id)
    return challenge


async def update_challenge(challenge_id: str, payload: ChallengeUpdate, db: AsyncSession) -> Challenge:
    challenge = await get_challenge_or_raise(challenge_id, db)
    updates = payload.model_dump(exclude_unset=True)

    if "name" in updates and updates["name"] is None:
        raise ValidationError.for_field("name", "can't be blank", "required")

    if "name" in updates:
        challenge.name = updates["name"]
    if "description" in updates:
        challenge.description = updates["description"]
    if "metadata" in updates:
        challenge.metadata_ = updates["metadata"]

    await db.commit()
    await db.refresh(challenge)
    return challenge


async def count_campaign_associations(challenge_id: str, db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(CampaignChallenge).where(CampaignChallenge.challenge_id == challenge_id)
    )
    return result.scalar_one()


async def delete_challenge(challenge_id: str, db: AsyncSession) -> Challenge:
    """
    Delete a challenge that no campaign uses.

    Raises HasAssociationsError while any campaign challenge still points at
    it. Any leftover participant assignments are removed with it.
    """
    challenge = await get_challenge_or_raise(challenge_id, db)

    if await count_campaign_associations(challenge_id, db):
        logger.info("Refusing to delete challenge %s: still attached to campaigns", challenge_id)
        raise HasAssociationsError("Challenge", challenge_id)

    await db.execute(
        delete(ParticipantChallenge)
        .where(ParticipantChallenge.challenge_id == challenge_id)
        .execution_options(synchronize_session=False)
    )
    await db.delete(challenge)
    try:
        await db.commit()
    except IntegrityError as e:
        # a campaign attached the challenge after the association count
        await db.rollback()
        logger.info("Challenge %s was attached concurrently: %s", challenge_id, e.orig)
        raise HasAssociationsError("Challenge", challenge_id) from e
    logger.info("Challenge deleted: id=%s", challenge_id)
    return challenge
