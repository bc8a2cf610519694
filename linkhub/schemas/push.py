from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel


class PushMessage(BaseModel):
    """One event addressed to one channel."""

    channel: str
    event: str
    payload: Dict[str, Any]
