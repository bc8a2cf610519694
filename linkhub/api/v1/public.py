from __future__ import annotations

from typing import List

from fastapi import APIRouter

from linkhub.api.deps import RoomServiceDep
from linkhub.schemas import LinkRead, PublicRoom

router = APIRouter()


@router.get(
    "/rooms/{room_name}",
    response_model=PublicRoom,
    summary="Public room view",
)
def read_public_room(room_name: str, service: RoomServiceDep) -> PublicRoom:
    return service.public_room(room_name)


@router.get(
    "/rooms/{room_name}/links",
    response_model=List[LinkRead],
    summary="Public link list of a room",
)
def read_public_links(room_name: str, service: RoomServiceDep) -> List[LinkRead]:
    """No authentication; unknown rooms simply have no links."""
    return service.public_links(room_name)
