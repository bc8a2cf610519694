"""WebSocket endpoints: public room viewers and private admin dashboards."""

import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from linkhub.api.deps import active_user, user_id_from_token
from linkhub.db import SessionDep
from linkhub.models import normalize_room_name
from linkhub.services.channels import admin_channel, manager, room_channel

logger = logging.getLogger(__name__)

router = APIRouter()


async def _serve(websocket: WebSocket, channel: str) -> None:
    """Keep one socket subscribed to one channel until the client goes away."""
    await websocket.accept()
    await manager.join(websocket, channel)

    try:
        await websocket.send_json({"event": "connected", "channel": channel})

        while True:
            try:
                # clients only ever send keepalives
                data = await websocket.receive_text()
                if data == "ping":
                    await websocket.send_json({"event": "pong"})
            except WebSocketDisconnect:
                logger.info(f"WebSocket disconnected gracefully from {channel}")
                break

    except Exception as e:
        logger.error(f"WebSocket error on {channel}: {e}", exc_info=True)

    finally:
        await manager.leave(websocket, channel)


@router.websocket("/rooms/{room_name}")
async def websocket_room(websocket: WebSocket, room_name: str):
    """
    Live link list of a room. No authentication.

    Frames: {"event": "link_added" | "link_updated" | "link_deleted", "data": {...}}
    """
    await _serve(websocket, room_channel(normalize_room_name(room_name)))


@router.websocket("/admin")
async def websocket_admin(
    websocket: WebSocket, session: SessionDep, token: str = Query(...)
):
    """
    Private channel of the authenticated admin. The JWT goes in the query
    string since browsers cannot set headers on websocket requests.

    Frames: {"event": "room_added" | "room_updated" | "room_deleted", "data": {...}}
    """
    try:
        user_id = user_id_from_token(token)
    except ValueError as e:
        logger.warning(f"WebSocket auth error: {e}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    user = active_user(session, user_id)
    # not held for the lifetime of the socket
    session.close()
    if user is None:
        logger.warning(f"WebSocket rejected for inactive or missing user {user_id}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await _serve(websocket, admin_channel(user_id))
