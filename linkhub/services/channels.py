"""
WebSocket channel registry.
Connections join named channels; publishing writes one frame to every member.
"""

import asyncio
import logging
from typing import Any, Dict, List, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


def room_channel(room_name: str) -> str:
    return f"room:{room_name}"


def admin_channel(user_id: int) -> str:
    return f"admin:{user_id}"


class ChannelManager:
    """Tracks which websockets listen on which channel."""

    def __init__(self):
        # {channel: {websocket1, websocket2, ...}}
        self.channels_map: Dict[str, Set[WebSocket]] = {}
        self._lock = asyncio.Lock()

    async def join(self, websocket: WebSocket, channel: str):
        async with self._lock:
            self.channels_map.setdefault(channel, set()).add(websocket)

        logger.info(f"WebSocket joined {channel}, subscribers={self.subscriber_count(channel)}")

    async def leave(self, websocket: WebSocket, channel: str):
        async with self._lock:
            self._discard(websocket, channel)

        logger.info(f"WebSocket left {channel}")

    async def publish(self, channel: str, event: str, payload: Dict[str, Any]) -> int:
        """Send to every subscriber of a channel; returns how many got it."""
        subscribers = list(self.channels_map.get(channel, ()))
        if not subscribers:
            logger.debug(f"No subscribers on {channel} for {event}")
            return 0

        frame = {"event": event, "data": payload}
        disconnected: List[WebSocket] = []
        delivered = 0
        for websocket in subscribers:
            try:
                await websocket.send_json(frame)
                delivered += 1
            except Exception as e:
                logger.error(f"Error sending {event} on {channel}: {e}")
                disconnected.append(websocket)

        if disconnected:
            async with self._lock:
                for ws in disconnected:
                    self._discard(ws, channel)

        logger.debug(f"{event} delivered on {channel} to {delivered} subscriber(s)")
        return delivered

    def _discard(self, websocket: WebSocket, channel: str) -> None:
        members = self.channels_map.get(channel)
        if members is None:
            return
        members.discard(websocket)
        if not members:
            del self.channels_map[channel]

    def channels(self) -> Set[str]:
        return set(self.channels_map.keys())

    def subscriber_count(self, channel: str) -> int:
        return len(self.channels_map.get(channel, set()))


# Global instance
manager = ChannelManager()
