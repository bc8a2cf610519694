"""Rate limiting configuration."""

from __future__ import annotations

import logging

from slowapi import Limiter
from slowapi.util import get_remote_address

from linkhub.core.config import settings

logger = logging.getLogger(__name__)

# memory:// for a single process, a redis:// URI when several instances run
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
)
logger.info("Rate limiter configured with storage %s", settings.RATE_LIMIT_STORAGE_URI)


def get_limiter() -> Limiter:
    """Get limiter instance."""
    return limiter
