from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from linkhub.models.link import LinkStatus


class LinkCreate(BaseModel):
    room_id: int
    url: str = Field(max_length=2048)


class LinkUpdate(BaseModel):
    """Partial update; omitted fields stay as they are."""

    url: Optional[str] = Field(default=None, max_length=2048)
    status: Optional[LinkStatus] = None


class LinkRead(BaseModel):
    id: int
    room_id: int
    url: str
    status: LinkStatus

    model_config = ConfigDict(from_attributes=True)


class LinkWithRoom(LinkRead):
    room_name: str
