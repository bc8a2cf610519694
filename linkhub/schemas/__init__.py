from .link import LinkCreate, LinkRead, LinkUpdate, LinkWithRoom
from .permission import PermissionChange
from .push import PushMessage
from .room import AdminData, PublicRoom, RoomCreate, RoomSnapshot
from .user import (
    RefreshTokenRequest,
    TokenPair,
    UserLogin,
    UserRead,
    UserSummary,
)

__all__ = [
    "AdminData",
    "LinkCreate",
    "LinkRead",
    "LinkUpdate",
    "LinkWithRoom",
    "PermissionChange",
    "PublicRoom",
    "PushMessage",
    "RefreshTokenRequest",
    "RoomCreate",
    "RoomSnapshot",
    "TokenPair",
    "UserLogin",
    "UserRead",
    "UserSummary",
]
