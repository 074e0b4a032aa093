from __future__ import annotations

import logging

from slowapi import Limiter
from slowapi.util import get_remote_address

from docscore.core.config import settings

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)


def scoring_limit() -> str:
    """Limit applied to scoring routes; falls back to the global RATE_LIMIT."""
    return settings.scoring_rate_limit or settings.rate_limit


def rate_limit(limit: str | None = None):
    """Decorate a route with a per-client limit, or leave it untouched when limiting is off."""
    if not settings.rate_limit_enabled:
        def passthrough(func):
            return func

        return passthrough

    value = limit or settings.rate_limit
    logger.debug("rate_limit_applied limit=%s", value)
    return limiter.limit(value)
