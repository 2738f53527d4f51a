from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from shortlinks.models.link import LinkRecord, LinkState


class LinkCreate(BaseModel):
    url: str = Field(..., min_length=1, description="The original URL to be shortened")
    click_limit: Optional[int] = Field(
        None, description="Maximum successful redirects; the default applies when omitted or not positive"
    )


class LinkUpdate(BaseModel):
    click_limit: int = Field(..., gt=0, description="New maximum number of successful redirects")


class LinkResponse(BaseModel):
    """Response schema built from a LinkRecord"""
    id: str
    original_url: str
    short_code: str
    short_url: str
    owner_id: str
    click_limit: int
    clicks_count: int
    active: bool
    state: LinkState
    created_at: datetime
    expires_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_record(cls, link: LinkRecord, short_url: str, now: datetime) -> "LinkResponse":
        with link.lock:
            return cls(
                id=link.id,
                original_url=link.original_url,
                short_code=link.short_code,
                short_url=short_url,
                owner_id=link.owner_id,
                click_limit=link.click_limit,
                clicks_count=link.clicks_count,
                active=link.active,
                state=link.state(now),
                created_at=link.created_at,
                expires_at=link.expires_at,
            )


class UserResponse(BaseModel):
    id: str
    created_at: datetime
    owned_links: List[str]
    notifications: List[str]

    model_config = ConfigDict(from_attributes=True)
