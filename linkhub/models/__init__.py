from .link import Link, LinkStatus
from .room import Room, normalize_room_name
from .room_permission import RoomPermission
from .user import ROLE_ADMIN, ROLE_SUPERADMIN, User

__all__ = [
    "Link",
    "LinkStatus",
    "ROLE_ADMIN",
    "ROLE_SUPERADMIN",
    "Room",
    "RoomPermission",
    "User",
    "normalize_room_name",
]
