from __future__ import annotations

from typing import Optional

from sqlmodel import Session, select

from linkhub.core.security import get_password_hash
from linkhub.exceptions import DuplicateName, ValidationError
from linkhub.models import ROLE_ADMIN, ROLE_SUPERADMIN, User


def provision_user(
    session: Session,
    username: str,
    password: str,
    super_admin: Optional[bool] = None,
) -> User:
    """Create an admin account.

    With ``super_admin`` left as None the very first account becomes the
    super-admin and every later one a regular admin.
    """
    username = username.strip().lower()
    if not username:
        raise ValidationError("Username is required")
    if not password:
        raise ValidationError("Password is required")

    if session.exec(select(User).where(User.username == username)).first():
        raise DuplicateName(username, kind="User")

    if super_admin is None:
        super_admin = session.exec(select(User.id)).first() is None

    user = User(
        username=username,
        hashed_password=get_password_hash(password),
        role=ROLE_SUPERADMIN if super_admin else ROLE_ADMIN,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user
