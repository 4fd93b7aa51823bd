"""Helpers that turn storage constraint failures into validation errors."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campaigns_api.exceptions import FieldError, ValidationError

logger = logging.getLogger(__name__)


def is_foreign_key_violation(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "foreign key" in message or "foreignkeyviolation" in message


async def commit_or_raise(
    db: AsyncSession,
    unique_error: FieldError,
    foreign_key_error: FieldError | None = None,
) -> None:
    """
    Commit the session, translating constraint violations.

    A unique constraint conflict (including one lost to a concurrent writer)
    becomes ``unique_error``; a foreign key failure becomes
    ``foreign_key_error`` when one is given.
    """
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if foreign_key_error is not None and is_foreign_key_violation(e):
            logger.info("Foreign key violation on %s: %s", foreign_key_error.field, e.orig)
            raise ValidationError([foreign_key_error]) from e
        logger.info("Unique constraint violation on %s: %s", unique_error.field, e.orig)
        raise ValidationError([unique_error]) from e
