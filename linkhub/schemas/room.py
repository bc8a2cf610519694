from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from linkhub.schemas.link import LinkRead
from linkhub.schemas.user import UserSummary


class RoomCreate(BaseModel):
    name: str = Field(max_length=255)


class RoomSnapshot(BaseModel):
    """Full view of a room as sent to admins that can manage it."""

    id: int
    name: str
    creator_id: int
    links: List[LinkRead] = []
    permitted_user_ids: List[int] = []

    model_config = ConfigDict(from_attributes=True)


class PublicRoom(BaseModel):
    """What visitors see: no creator, no permission list."""

    name: str
    links: List[LinkRead] = []


class AdminData(BaseModel):
    rooms: List[RoomSnapshot]
    users: List[UserSummary]
    current_user_id: int
    is_super_admin: bool
