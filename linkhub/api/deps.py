from __future__ import annotations

from typing import Annotated, Optional

from fastapi import BackgroundTasks, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from linkhub.core.config import settings
from linkhub.core.security import verify_token
from linkhub.db import SessionDep
from linkhub.models import User
from linkhub.services.fanout import Notifier, get_notifier
from linkhub.services.rooms import RoomService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")


def user_id_from_token(token: str) -> int:
    """Raises ValueError for anything but a valid access token."""
    payload = verify_token(token, token_type="access")
    user_id = payload.get("sub")
    if not user_id:
        raise ValueError("Invalid authentication payload")
    return int(user_id)


def active_user(session: Session, user_id: int) -> Optional[User]:
    user = session.get(User, user_id)
    if user is None or not user.is_active:
        return None
    return user


def get_current_user(
    session: SessionDep,
    token: str = Depends(oauth2_scheme),
) -> User:
    try:
        user_id = user_id_from_token(token)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    user = active_user(session, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Inactive or missing user",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def get_room_service(
    session: SessionDep,
    background_tasks: BackgroundTasks,
    notifier: Notifier = Depends(get_notifier),
) -> RoomService:
    """Pushes are queued as background tasks, so they run once the response is out."""

    def on_commit(messages) -> None:
        background_tasks.add_task(notifier.deliver, messages)

    return RoomService(session, on_commit=on_commit)


RoomServiceDep = Annotated[RoomService, Depends(get_room_service)]
