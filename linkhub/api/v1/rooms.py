from __future__ import annotations

from fastapi import APIRouter, status

from linkhub.api.deps import CurrentUser, RoomServiceDep
from linkhub.schemas import RoomCreate, RoomSnapshot

router = APIRouter()


@router.post(
    "/",
    response_model=RoomSnapshot,
    status_code=status.HTTP_201_CREATED,
    summary="Create room",
)
def create_room(
    payload: RoomCreate, service: RoomServiceDep, current_user: CurrentUser
) -> RoomSnapshot:
    return service.create_room(payload.name, current_user)


@router.get(
    "/{room_id}",
    response_model=RoomSnapshot,
    summary="Get room snapshot",
)
def get_room(room_id: int, service: RoomServiceDep, current_user: CurrentUser) -> RoomSnapshot:
    service.ensure_access(room_id, current_user)
    return service.require_snapshot(room_id)


@router.delete(
    "/{room_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete room",
)
def delete_room(
    room_id: int, service: RoomServiceDep, current_user: CurrentUser
) -> dict[str, str]:
    service.delete_room(room_id, current_user)
    return {"status": "deleted"}
