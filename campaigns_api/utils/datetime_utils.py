"""
Timestamp helpers.

Timestamps are stored as naive UTC datetimes so that values compare the same
way on PostgreSQL and SQLite. Aware values coming from clients are converted
to UTC before they reach a query.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def isoformat_utc(value: datetime) -> str:
    """Render a stored timestamp as an ISO-8601 instant with a ``Z`` suffix."""
    value = to_naive_utc(value)
    return value.isoformat() + "Z"


def parse_iso_datetime(raw: str | None) -> datetime | None:
    """
    Parse an ISO-8601 instant, returning None for anything unparseable.

    A trailing ``Z`` is accepted, and a ``+`` in the offset that arrived
    URL-decoded as a space is restored.
    """
    if not raw:
        return None
    candidate = raw.strip()
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    if " " in candidate and "T" in candidate:
        candidate = candidate.replace(" ", "+")
    try:
        return to_naive_utc(datetime.fromisoformat(candidate))
    except ValueError:
        return None
