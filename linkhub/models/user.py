from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from linkhub.models.common import created_at_field

ROLE_SUPERADMIN = "superadmin"
ROLE_ADMIN = "admin"


class User(SQLModel, table=True):
    """Administrator account. Visitors never log in."""

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True, max_length=150)
    hashed_password: str = Field(max_length=255)
    role: str = Field(default=ROLE_ADMIN, max_length=50)
    is_active: bool = Field(default=True)
    created_at: datetime = created_at_field()

    @property
    def is_super_admin(self) -> bool:
        return self.role == ROLE_SUPERADMIN
