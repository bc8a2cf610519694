"""
Room and link state.

Every mutation commits first and only then hands its push messages to
``on_commit``; a failed transaction is rolled back and pushes nothing.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Tuple

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from linkhub.exceptions import DuplicateName, Forbidden, NotFound, ValidationError
from linkhub.models import (
    ROLE_SUPERADMIN,
    Link,
    LinkStatus,
    Room,
    RoomPermission,
    User,
    normalize_room_name,
)
from linkhub.schemas import (
    AdminData,
    LinkRead,
    LinkWithRoom,
    PublicRoom,
    PushMessage,
    RoomSnapshot,
    UserSummary,
)
from linkhub.services import fanout
from linkhub.services.permissions import (
    add_room_permission,
    admin_audience,
    ensure_room_access,
    permitted_user_ids,
)

logger = logging.getLogger(__name__)

OnCommit = Callable[[List[PushMessage]], None]


def _discard_messages(messages: List[PushMessage]) -> None:
    return None


class RoomService:
    def __init__(self, session: Session, on_commit: OnCommit | None = None):
        self.session = session
        self._on_commit = on_commit or _discard_messages

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        try:
            yield
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def _publish(self, messages: List[PushMessage]) -> None:
        if messages:
            self._on_commit(messages)

    def _delete_row(self, statement, missing: str) -> None:
        """Run a DELETE in its own transaction; no matching row is NotFound."""
        with self._transaction():
            result = self.session.connection().execute(statement)
            if result.rowcount == 0:
                raise NotFound(missing)

    # -- reads -------------------------------------------------------------

    def _links(self, room_id: int) -> List[LinkRead]:
        statement = select(Link).where(Link.room_id == room_id).order_by(Link.id)
        return [LinkRead.model_validate(link) for link in self.session.exec(statement).all()]

    def room_snapshot(self, room_id: int) -> Optional[RoomSnapshot]:
        room = self.session.get(Room, room_id)
        if room is None:
            return None
        return RoomSnapshot(
            id=room.id,
            name=room.name,
            creator_id=room.creator_id,
            links=self._links(room.id),
            permitted_user_ids=permitted_user_ids(self.session, room.id),
        )

    def require_snapshot(self, room_id: int) -> RoomSnapshot:
        snapshot = self.room_snapshot(room_id)
        if snapshot is None:
            raise NotFound("Room not found")
        return snapshot

    def ensure_access(self, room_id: int, user: User) -> Room:
        return ensure_room_access(self.session, room_id, user)

    def public_links(self, room_name: str) -> List[LinkRead]:
        statement = (
            select(Link)
            .join(Room, Link.room_id == Room.id)
            .where(Room.name == normalize_room_name(room_name))
            .order_by(Link.id)
        )
        return [LinkRead.model_validate(link) for link in self.session.exec(statement).all()]

    def public_room(self, room_name: str) -> PublicRoom:
        name = normalize_room_name(room_name)
        room = self.session.exec(select(Room).where(Room.name == name)).one_or_none()
        if room is None:
            raise NotFound("Room not found")
        return PublicRoom(name=room.name, links=self._links(room.id))

    def admin_data(self, user: User) -> AdminData:
        if user.is_super_admin:
            rooms = self.session.exec(select(Room).order_by(Room.name)).all()
            users = self.session.exec(
                select(User).where(User.role != ROLE_SUPERADMIN).order_by(User.id)
            ).all()
        else:
            rooms = self.session.exec(
                select(Room)
                .join(RoomPermission, RoomPermission.room_id == Room.id)
                .where(RoomPermission.user_id == user.id)
                .order_by(Room.name)
            ).all()
            users = []

        return AdminData(
            rooms=[self.require_snapshot(room.id) for room in rooms],
            users=[UserSummary.model_validate(u) for u in users],
            current_user_id=user.id,
            is_super_admin=user.is_super_admin,
        )

    # -- rooms -------------------------------------------------------------

    def create_room(self, name: str, creator: User) -> RoomSnapshot:
        normalized = normalize_room_name(name)
        if not normalized:
            raise ValidationError("Room name is required")

        existing = self.session.exec(select(Room).where(Room.name == normalized)).first()
        if existing:
            raise DuplicateName(normalized)

        try:
            with self._transaction():
                room = Room(name=normalized, creator_id=creator.id)
                self.session.add(room)
                self.session.flush()
                if not creator.is_super_admin:
                    add_room_permission(self.session, room_id=room.id, user_id=creator.id)
        except IntegrityError:
            # lost a race against another insert of the same name
            raise DuplicateName(normalized) from None

        snapshot = self.require_snapshot(room.id)
        logger.info(f"Room {snapshot.name} ({snapshot.id}) created by user {creator.id}")
        self._publish(
            fanout.room_event(
                fanout.ROOM_ADDED, snapshot, admin_audience(self.session, snapshot.id)
            )
        )
        return snapshot

    def delete_room(self, room_id: int, user: User) -> None:
        ensure_room_access(self.session, room_id, user)
        # grants are gone once the room is, so the audience is taken now
        audience = admin_audience(self.session, room_id)

        self._delete_row(delete(Room).where(Room.id == room_id), "Room not found")

        logger.info(f"Room {room_id} deleted by user {user.id}")
        self._publish(fanout.room_deleted(room_id, audience))

    # -- permissions -------------------------------------------------------

    def grant_permission(self, room_id: int, target_user_id: int, granter: User) -> RoomSnapshot:
        if not granter.is_super_admin:
            raise Forbidden("Only the super-admin can grant permissions")

        if self.session.get(Room, room_id) is None:
            raise NotFound("Room not found")
        if self.session.get(User, target_user_id) is None:
            raise NotFound("User not found")

        try:
            with self._transaction():
                created = add_room_permission(
                    self.session, room_id=room_id, user_id=target_user_id
                )
        except IntegrityError:
            created = False

        snapshot = self.require_snapshot(room_id)
        if not created:
            logger.debug(f"User {target_user_id} already holds room {room_id}")
            return snapshot

        logger.info(f"User {target_user_id} granted room {room_id}")
        others = [
            uid for uid in admin_audience(self.session, room_id) if uid != target_user_id
        ]
        self._publish(
            fanout.room_event(fanout.ROOM_ADDED, snapshot, [target_user_id])
            + fanout.room_event(fanout.ROOM_UPDATED, snapshot, others)
        )
        return snapshot

    def revoke_permission(
        self, room_id: int, target_user_id: int, granter: User
    ) -> Optional[RoomSnapshot]:
        if not granter.is_super_admin:
            raise Forbidden("Only the super-admin can revoke permissions")

        with self._transaction():
            grant = self.session.get(
                RoomPermission, {"user_id": target_user_id, "room_id": room_id}
            )
            if grant is not None:
                self.session.delete(grant)

        snapshot = self.room_snapshot(room_id)
        audience = admin_audience(self.session, room_id) if snapshot else []

        messages: List[PushMessage] = []
        # a super-admin keeps seeing the room even without a grant
        if target_user_id not in audience:
            messages += fanout.room_deleted(room_id, [target_user_id])
        if snapshot is not None:
            messages += fanout.room_event(fanout.ROOM_UPDATED, snapshot, audience)

        logger.info(f"User {target_user_id} revoked from room {room_id}")
        self._publish(messages)
        return snapshot

    # -- links -------------------------------------------------------------

    def _room_changed(self, room_id: int) -> Tuple[RoomSnapshot, List[PushMessage]]:
        snapshot = self.require_snapshot(room_id)
        return snapshot, fanout.room_event(
            fanout.ROOM_UPDATED, snapshot, admin_audience(self.session, room_id)
        )

    def create_link(self, room_id: int, url: str, user: User) -> Tuple[LinkRead, RoomSnapshot]:
        room = ensure_room_access(self.session, room_id, user)
        room_name = room.name
        url = url.strip()
        if not url:
            raise ValidationError("Link url is required")

        with self._transaction():
            link = Link(room_id=room_id, url=url, status=LinkStatus.AVAILABLE.value)
            self.session.add(link)

        self.session.refresh(link)
        created = LinkRead.model_validate(link)
        snapshot, messages = self._room_changed(room_id)
        self._publish([fanout.link_event(fanout.LINK_ADDED, room_name, created)] + messages)
        return created, snapshot

    def update_link(
        self,
        link_id: int,
        user: User,
        url: Optional[str] = None,
        status: Optional[LinkStatus | str] = None,
    ) -> Tuple[LinkWithRoom, RoomSnapshot]:
        link = self.session.get(Link, link_id)
        if link is None:
            raise NotFound("Link not found")
        room = ensure_room_access(self.session, link.room_id, user)
        room_name = room.name

        changes = {}
        if url is not None:
            url = url.strip()
            if not url:
                raise ValidationError("Link url cannot be empty")
            changes["url"] = url
        if status is not None:
            try:
                changes["status"] = LinkStatus(status).value
            except ValueError:
                raise ValidationError(f"Unknown link status '{status}'") from None

        if changes:
            with self._transaction():
                for field, value in changes.items():
                    setattr(link, field, value)
                self.session.add(link)
            self.session.refresh(link)

        updated = LinkWithRoom(
            **LinkRead.model_validate(link).model_dump(), room_name=room_name
        )
        snapshot, messages = self._room_changed(link.room_id)
        if changes:
            self._publish(
                [fanout.link_event(fanout.LINK_UPDATED, room_name, updated)] + messages
            )
        return updated, snapshot

    def delete_link(self, link_id: int, user: User) -> None:
        link = self.session.get(Link, link_id)
        if link is None:
            raise NotFound("Link not found")
        room_id = link.room_id
        room_name = ensure_room_access(self.session, room_id, user).name

        self._delete_row(delete(Link).where(Link.id == link_id), "Link not found")

        _, messages = self._room_changed(room_id)
        self._publish([fanout.link_deleted(room_name, link_id)] + messages)
