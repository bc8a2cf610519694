from __future__ import annotations

from fastapi import APIRouter, status

from linkhub.api.deps import CurrentUser, RoomServiceDep
from linkhub.schemas import LinkCreate, LinkRead, LinkUpdate, LinkWithRoom

router = APIRouter()


@router.post(
    "/",
    response_model=LinkRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add link to room",
)
def create_link(
    payload: LinkCreate, service: RoomServiceDep, current_user: CurrentUser
) -> LinkRead:
    link, _ = service.create_link(payload.room_id, payload.url, current_user)
    return link


@router.put(
    "/{link_id}",
    response_model=LinkWithRoom,
    summary="Update link url or status",
)
def update_link(
    link_id: int,
    payload: LinkUpdate,
    service: RoomServiceDep,
    current_user: CurrentUser,
) -> LinkWithRoom:
    link, _ = service.update_link(
        link_id, current_user, url=payload.url, status=payload.status
    )
    return link


@router.delete(
    "/{link_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete link",
)
def delete_link(
    link_id: int, service: RoomServiceDep, current_user: CurrentUser
) -> dict[str, str]:
    service.delete_link(link_id, current_user)
    return {"status": "deleted"}
