from __future__ import annotations

from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class LinkStatus(str, Enum):
    AVAILABLE = "available"
    FILLING = "filling"
    FULL = "full"


class Link(SQLModel, table=True):
    """Shareable URL with a capacity status."""

    __tablename__ = "links"

    id: Optional[int] = Field(default=None, primary_key=True)
    room_id: int = Field(foreign_key="rooms.id", ondelete="CASCADE", index=True)
    url: str = Field(max_length=2048)
    status: str = Field(default=LinkStatus.AVAILABLE.value, max_length=20)
