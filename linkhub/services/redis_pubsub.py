"""
Redis Pub/Sub relay for push messages.
Every API process publishes to one Redis channel and forwards what it hears
to its own websocket subscribers.
"""

import asyncio
import json
import logging
from typing import Optional

import redis.asyncio as aioredis
from redis.asyncio.client import PubSub

from linkhub.core.config import settings
from linkhub.schemas.push import PushMessage
from linkhub.services.channels import ChannelManager, manager

logger = logging.getLogger(__name__)


class RedisPubSubService:
    """Relays PushMessages between processes through Redis."""

    def __init__(self, channel_manager: ChannelManager, channel: str):
        self.channel_manager = channel_manager
        self.channel = channel
        self.redis: Optional[aioredis.Redis] = None
        self.pubsub: Optional[PubSub] = None
        self._listener_task: Optional[asyncio.Task] = None

    @property
    def connected(self) -> bool:
        return self.redis is not None

    async def connect(self, url: str):
        """Connect to Redis and subscribe to the relay channel."""
        try:
            self.redis = aioredis.from_url(
                url,
                encoding="utf-8",
                decode_responses=True,
            )
            self.pubsub = self.redis.pubsub()
            await self.pubsub.subscribe(self.channel)

            logger.info(f"Redis Pub/Sub connected and subscribed to '{self.channel}'")

            self._listener_task = asyncio.create_task(self._listen())

        except Exception as e:
            logger.error(f"Failed to connect to Redis Pub/Sub: {e}")
            self.redis = None
            raise

    async def disconnect(self):
        """Disconnect from Redis Pub/Sub."""
        if self._listener_task:
            self._listener_task.cancel()
            try:
                await self._listener_task
            except asyncio.CancelledError:
                pass

        if self.pubsub:
            await self.pubsub.unsubscribe(self.channel)
            await self.pubsub.aclose()

        if self.redis:
            await self.redis.aclose()
            self.redis = None

        logger.info("Redis Pub/Sub disconnected")

    async def _listen(self):
        logger.info("Starting Redis Pub/Sub listener...")

        try:
            async for message in self.pubsub.listen():
                if message["type"] != "message":
                    continue
                try:
                    await self.forward(message["data"])
                except Exception as e:
                    logger.error(f"Error processing Redis message: {e}", exc_info=True)

        except asyncio.CancelledError:
            logger.info("Redis Pub/Sub listener cancelled")
        except Exception as e:
            logger.error(f"Redis Pub/Sub listener error: {e}", exc_info=True)

    async def forward(self, raw: str) -> int:
        """Hand one relayed message to the local channel manager."""
        message = PushMessage.model_validate(json.loads(raw))
        return await self.channel_manager.publish(
            message.channel, message.event, message.payload
        )

    async def publish(self, message: PushMessage) -> None:
        if not self.redis:
            raise RuntimeError("Redis not connected")

        await self.redis.publish(self.channel, message.model_dump_json())
        logger.debug(f"Published {message.event} for {message.channel} to Redis")


# Global instance
redis_pubsub = RedisPubSubService(manager, settings.PUBSUB_CHANNEL)
