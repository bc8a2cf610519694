import asyncio

import pytest

from linkhub.schemas import PushMessage
from linkhub.services.channels import ChannelManager, admin_channel, room_channel
from linkhub.services.fanout import Notifier
from linkhub.services.redis_pubsub import RedisPubSubService


class FakeSocket:
    def __init__(self, broken: bool = False):
        self.sent = []
        self.broken = broken

    async def send_json(self, data):
        if self.broken:
            raise RuntimeError("connection reset")
        self.sent.append(data)


class FakeRelay:
    connected = True

    def __init__(self):
        self.published = []

    async def publish(self, message):
        self.published.append(message)


def test_channel_keys():
    assert room_channel("team-x") == "room:team-x"
    assert admin_channel(7) == "admin:7"


def test_publish_reaches_every_subscriber_of_the_channel_only():
    async def scenario():
        manager = ChannelManager()
        viewer_a, viewer_b, admin = FakeSocket(), FakeSocket(), FakeSocket()
        await manager.join(viewer_a, "room:team-x")
        await manager.join(viewer_b, "room:team-x")
        await manager.join(admin, "admin:2")

        delivered = await manager.publish("room:team-x", "link_added", {"id": 1})
        return delivered, viewer_a, viewer_b, admin

    delivered, viewer_a, viewer_b, admin = asyncio.run(scenario())

    assert delivered == 2
    assert viewer_a.sent == viewer_b.sent == [{"event": "link_added", "data": {"id": 1}}]
    assert admin.sent == []


def test_dead_sockets_are_dropped():
    async def scenario():
        manager = ChannelManager()
        alive, dead = FakeSocket(), FakeSocket(broken=True)
        await manager.join(alive, "admin:2")
        await manager.join(dead, "admin:2")

        delivered = await manager.publish("admin:2", "room_updated", {})
        return manager, delivered

    manager, delivered = asyncio.run(scenario())

    assert delivered == 1
    assert manager.subscriber_count("admin:2") == 1


def test_leave_forgets_empty_channels():
    async def scenario():
        manager = ChannelManager()
        socket = FakeSocket()
        await manager.join(socket, "room:a")
        await manager.leave(socket, "room:a")
        return manager, await manager.publish("room:a", "link_added", {})

    manager, delivered = asyncio.run(scenario())

    assert delivered == 0
    assert manager.channels() == set()


def test_notifier_delivers_locally_and_survives_failures():
    async def scenario():
        manager = ChannelManager()
        socket = FakeSocket()
        await manager.join(socket, "room:a")

        async def exploding_publish(channel, event, payload):
            if channel == "room:boom":
                raise RuntimeError("boom")
            return await ChannelManager.publish(manager, channel, event, payload)

        manager.publish = exploding_publish
        await Notifier(manager).deliver(
            [
                PushMessage(channel="room:boom", event="link_added", payload={"id": 1}),
                PushMessage(channel="room:a", event="link_added", payload={"id": 2}),
            ]
        )
        return socket

    socket = asyncio.run(scenario())

    assert socket.sent == [{"event": "link_added", "data": {"id": 2}}]


def test_notifier_prefers_connected_relay():
    relay = FakeRelay()
    message = PushMessage(channel="admin:1", event="room_deleted", payload={"room_id": 3})

    asyncio.run(Notifier(ChannelManager(), relay).deliver([message]))

    assert relay.published == [message]


def test_relay_forwards_to_local_subscribers():
    async def scenario():
        manager = ChannelManager()
        socket = FakeSocket()
        await manager.join(socket, "admin:1")
        relay = RedisPubSubService(manager, "linkhub:test")
        raw = PushMessage(
            channel="admin:1", event="room_deleted", payload={"room_id": 3}
        ).model_dump_json()
        return await relay.forward(raw), socket

    delivered, socket = asyncio.run(scenario())

    assert delivered == 1
    assert socket.sent == [{"event": "room_deleted", "data": {"room_id": 3}}]


def test_relay_publish_requires_connection():
    relay = RedisPubSubService(ChannelManager(), "linkhub:test")
    message = PushMessage(channel="admin:1", event="room_deleted", payload={})

    assert relay.connected is False
    with pytest.raises(RuntimeError):
        asyncio.run(relay.publish(message))
