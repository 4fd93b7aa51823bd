from datetime import datetime
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, PlainSerializer

from campaigns_api.utils.datetime_utils import isoformat_utc
from campaigns_api.utils.pagination import Page

T = TypeVar("T")

UTCDateTime = Annotated[datetime, PlainSerializer(isoformat_utc, return_type=str, when_used="json")]


class PageResponse(BaseModel, Generic[T]):
    """List envelope returned by every paginated endpoint"""

    data: list[T]
    next_cursor: UTCDateTime | None = None
    has_more: bool


def page_response(page: Page, schema: type[BaseModel]) -> dict:
    return {
        "data": [schema.model_validate(item) for item in page.items],
        "next_cursor": page.next_cursor,
        "has_more": page.has_more,
    }
