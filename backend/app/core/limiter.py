"""
Rate limiting support via slowapi.

The module-level limiter is used by route decorators at import time;
apply_rate_limiting() wires the middleware and 429 handler onto the app.
"""
from typing import Tuple

from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from app.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


def apply_rate_limiting(app) -> Tuple[Limiter, bool]:
    """
    Attach SlowAPI middleware and exception handler.
    Returns (limiter, enabled_flag).
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    return limiter, limiter.enabled
