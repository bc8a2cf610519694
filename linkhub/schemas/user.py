from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserSummary(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class UserRead(UserSummary):
    role: str
    is_active: bool
    is_super_admin: bool
    created_at: datetime


class UserLogin(BaseModel):
    username: str
    password: str


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshTokenRequest(BaseModel):
    refresh_token: str
