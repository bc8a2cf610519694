from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from linkhub.models.common import created_at_field


class Room(SQLModel, table=True):
    """Named, access-controlled collection of links."""

    __tablename__ = "rooms"

    id: Optional[int] = Field(default=None, primary_key=True)
    # stored lowercase, see normalize_room_name
    name: str = Field(index=True, unique=True, max_length=255)
    creator_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    created_at: datetime = created_at_field()


def normalize_room_name(name: str) -> str:
    return name.strip().lower()
