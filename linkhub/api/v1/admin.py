from __future__ import annotations

from fastapi import APIRouter

from linkhub.api.deps import CurrentUser, RoomServiceDep
from linkhub.schemas import AdminData

router = APIRouter()


@router.get("/data", response_model=AdminData, summary="Dashboard data for the current admin")
def read_admin_data(service: RoomServiceDep, current_user: CurrentUser) -> AdminData:
    """Rooms the user can manage, as snapshots; super-admins also get the user list."""
    return service.admin_data(current_user)
