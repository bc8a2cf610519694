from __future__ import annotations

from typing import List

from sqlmodel import Session, select

from linkhub.exceptions import Forbidden, NotFound
from linkhub.models import ROLE_SUPERADMIN, Room, RoomPermission, User


def is_super_admin(user: User) -> bool:
    return user.is_super_admin


def is_authorized(session: Session, room_id: int, user: User) -> bool:
    """Super-admins manage every room; everyone else needs a grant row."""
    if is_super_admin(user):
        return True

    grant = session.exec(
        select(RoomPermission).where(
            RoomPermission.room_id == room_id,
            RoomPermission.user_id == user.id,
        )
    ).one_or_none()
    return grant is not None


def ensure_room_access(session: Session, room_id: int, user: User) -> Room:
    if not is_authorized(session, room_id, user):
        raise Forbidden("Access to room denied")

    room = session.get(Room, room_id)
    if not room:
        raise NotFound("Room not found")
    return room


def permitted_user_ids(session: Session, room_id: int) -> List[int]:
    statement = (
        select(RoomPermission.user_id)
        .where(RoomPermission.room_id == room_id)
        .order_by(RoomPermission.user_id)
    )
    return list(session.exec(statement).all())


def super_admin_ids(session: Session) -> List[int]:
    statement = (
        select(User.id)
        .where(User.role == ROLE_SUPERADMIN, User.is_active == True)
        .order_by(User.id)
    )
    return list(session.exec(statement).all())


def admin_audience(session: Session, room_id: int) -> List[int]:
    """User ids whose dashboards show this room: grant holders plus super-admins."""
    return sorted(set(permitted_user_ids(session, room_id)) | set(super_admin_ids(session)))


def add_room_permission(session: Session, *, room_id: int, user_id: int) -> bool:
    """Stage a grant; returns False when it already exists."""
    existing = session.get(RoomPermission, {"user_id": user_id, "room_id": room_id})
    if existing:
        return False

    session.add(RoomPermission(user_id=user_id, room_id=room_id))
    return True
