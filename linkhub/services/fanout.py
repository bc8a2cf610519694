"""
Fan-out of room and link changes.

Visitors on a room channel only ever see link events. Admin channels get
room-level snapshots so every open dashboard of every user with access to the
room stays in sync.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from linkhub.core.config import settings
from linkhub.schemas import LinkRead, PushMessage, RoomSnapshot
from linkhub.services.channels import ChannelManager, admin_channel, manager, room_channel
from linkhub.services.redis_pubsub import RedisPubSubService, redis_pubsub

logger = logging.getLogger(__name__)

LINK_ADDED = "link_added"
LINK_UPDATED = "link_updated"
LINK_DELETED = "link_deleted"
ROOM_ADDED = "room_added"
ROOM_UPDATED = "room_updated"
ROOM_DELETED = "room_deleted"


def link_event(event: str, room_name: str, link: LinkRead) -> PushMessage:
    return PushMessage(
        channel=room_channel(room_name),
        event=event,
        payload=link.model_dump(mode="json"),
    )


def link_deleted(room_name: str, link_id: int) -> PushMessage:
    return PushMessage(
        channel=room_channel(room_name), event=LINK_DELETED, payload={"id": link_id}
    )


def room_event(
    event: str, snapshot: RoomSnapshot, audience: Iterable[int]
) -> List[PushMessage]:
    payload = snapshot.model_dump(mode="json")
    return [
        PushMessage(channel=admin_channel(user_id), event=event, payload=payload)
        for user_id in audience
    ]


def room_deleted(room_id: int, audience: Iterable[int]) -> List[PushMessage]:
    return [
        PushMessage(
            channel=admin_channel(user_id), event=ROOM_DELETED, payload={"room_id": room_id}
        )
        for user_id in audience
    ]


class Notifier:
    """Best-effort, at-most-once delivery of PushMessages."""

    def __init__(
        self,
        channel_manager: ChannelManager,
        relay: Optional[RedisPubSubService] = None,
    ):
        self.channel_manager = channel_manager
        self.relay = relay

    async def deliver(self, messages: List[PushMessage]) -> None:
        for message in messages:
            try:
                if self.relay is not None and self.relay.connected:
                    await self.relay.publish(message)
                else:
                    await self.channel_manager.publish(
                        message.channel, message.event, message.payload
                    )
            except Exception as e:
                # a lost push never fails the mutation that caused it
                logger.error(f"Failed to push {message.event} to {message.channel}: {e}")


notifier = Notifier(manager, redis_pubsub if settings.REDIS_PUBSUB_ENABLED else None)


def get_notifier() -> Notifier:
    return notifier
