from fastapi import APIRouter, HTTPException, Request, status
from sqlmodel import select

from linkhub.api.deps import CurrentUser, active_user
from linkhub.core.config import settings
from linkhub.core.limiter import limiter
from linkhub.core.security import (
    create_access_token,
    create_refresh_token,
    verify_password,
    verify_token,
)
from linkhub.db import SessionDep
from linkhub.models import User
from linkhub.schemas import RefreshTokenRequest, TokenPair, UserLogin, UserRead

router = APIRouter()


@router.post(
    "/login",
    response_model=TokenPair,
    summary="Login and obtain tokens",
)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(request: Request, payload: UserLogin, session: SessionDep) -> TokenPair:
    username = payload.username.strip().lower()
    user = session.exec(select(User).where(User.username == username)).one_or_none()
    if not user or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is inactive",
        )

    return TokenPair(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
    )


@router.post(
    "/refresh",
    response_model=TokenPair,
    summary="Refresh access token",
)
def refresh_tokens(payload: RefreshTokenRequest, session: SessionDep) -> TokenPair:
    try:
        refresh_payload = verify_token(payload.refresh_token, token_type="refresh")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        ) from None

    user_id = refresh_payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token payload",
        )

    try:
        user = active_user(session, int(user_id))
    except ValueError:
        user = None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Inactive or missing user",
        )

    return TokenPair(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
    )


@router.get("/me", response_model=UserRead, summary="Get current user profile")
def read_me(current_user: CurrentUser) -> User:
    return current_user
