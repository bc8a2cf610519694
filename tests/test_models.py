from linkhub.models import Room, RoomPermission, User


def test_created_at_defaults_are_timezone_aware():
    stamps = [
        User(username="dave", hashed_password="x").created_at,
        Room(name="lobby", creator_id=1).created_at,
        RoomPermission(user_id=1, room_id=1).created_at,
    ]

    assert all(stamp.tzinfo is not None for stamp in stamps)
    assert all(stamp.utcoffset().total_seconds() == 0 for stamp in stamps)


def test_created_at_is_stored(session, users):
    room = Room(name="lobby", creator_id=users["alice"].id)
    session.add(room)
    session.commit()
    session.refresh(room)
    grant = RoomPermission(user_id=users["alice"].id, room_id=room.id)
    session.add(grant)
    session.commit()
    session.refresh(grant)

    assert room.created_at is not None
    assert grant.created_at is not None
    assert users["alice"].created_at is not None
