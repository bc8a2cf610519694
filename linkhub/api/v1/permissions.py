from __future__ import annotations

from fastapi import APIRouter, status

from linkhub.api.deps import CurrentUser, RoomServiceDep
from linkhub.schemas import PermissionChange, RoomSnapshot

router = APIRouter()


@router.post(
    "/",
    response_model=RoomSnapshot,
    status_code=status.HTTP_201_CREATED,
    summary="Grant room permission",
)
def grant_permission(
    payload: PermissionChange, service: RoomServiceDep, current_user: CurrentUser
) -> RoomSnapshot:
    """Super-admin only. Granting an existing permission is a no-op."""
    return service.grant_permission(payload.room_id, payload.user_id, current_user)


@router.delete(
    "/",
    status_code=status.HTTP_200_OK,
    summary="Revoke room permission",
)
def revoke_permission(
    payload: PermissionChange, service: RoomServiceDep, current_user: CurrentUser
) -> dict[str, str]:
    service.revoke_permission(payload.room_id, payload.user_id, current_user)
    return {"status": "revoked"}
