from __future__ import annotations

from pydantic import BaseModel


class PermissionChange(BaseModel):
    user_id: int
    room_id: int
