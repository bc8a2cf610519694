from sqlmodel import select

from linkhub.models import Room, RoomPermission
from linkhub.services.permissions import (
    add_room_permission,
    admin_audience,
    is_authorized,
    permitted_user_ids,
    super_admin_ids,
)


def _room(session, name, creator):
    room = Room(name=name, creator_id=creator.id)
    session.add(room)
    session.commit()
    session.refresh(room)
    return room


def test_super_admin_is_authorized_without_grant(session, users):
    room = _room(session, "lobby", users["alice"])

    assert is_authorized(session, room.id, users["root"])
    # even for rooms that do not exist
    assert is_authorized(session, 999, users["root"])


def test_admin_authorized_only_with_grant(session, users):
    room = _room(session, "lobby", users["alice"])
    assert not is_authorized(session, room.id, users["alice"])

    add_room_permission(session, room_id=room.id, user_id=users["alice"].id)
    session.commit()

    assert is_authorized(session, room.id, users["alice"])
    assert not is_authorized(session, room.id, users["bob"])


def test_add_room_permission_is_idempotent(session, users):
    room = _room(session, "lobby", users["alice"])

    assert add_room_permission(session, room_id=room.id, user_id=users["bob"].id) is True
    session.commit()
    assert add_room_permission(session, room_id=room.id, user_id=users["bob"].id) is False
    session.commit()

    grants = session.exec(
        select(RoomPermission).where(RoomPermission.room_id == room.id)
    ).all()
    assert len(grants) == 1


def test_audience_includes_grant_holders_and_super_admins(session, users):
    room = _room(session, "lobby", users["alice"])
    add_room_permission(session, room_id=room.id, user_id=users["carol"].id)
    add_room_permission(session, room_id=room.id, user_id=users["alice"].id)
    session.commit()

    assert permitted_user_ids(session, room.id) == [users["alice"].id, users["carol"].id]
    assert super_admin_ids(session) == [users["root"].id]
    assert admin_audience(session, room.id) == [
        users["root"].id,
        users["alice"].id,
        users["carol"].id,
    ]
