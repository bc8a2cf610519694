from __future__ import annotations

from fastapi import status


class LinkhubError(Exception):
    """Base for errors the API reports to the caller as-is."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class ValidationError(LinkhubError):
    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateName(LinkhubError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, name: str, kind: str = "Room"):
        self.name = name
        super().__init__(f"{kind} name '{name}' is already taken")


class Forbidden(LinkhubError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(detail)


class NotFound(LinkhubError):
    status_code = status.HTTP_404_NOT_FOUND
