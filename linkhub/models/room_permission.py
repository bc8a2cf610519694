from __future__ import annotations

from datetime import datetime

from sqlmodel import Field, SQLModel

from linkhub.models.common import created_at_field


class RoomPermission(SQLModel, table=True):
    """Grant letting a non-super-admin user manage one room."""

    __tablename__ = "room_permissions"

    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", primary_key=True)
    room_id: int = Field(
        foreign_key="rooms.id", ondelete="CASCADE", primary_key=True, index=True
    )
    created_at: datetime = created_at_field()
