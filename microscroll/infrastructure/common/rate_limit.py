"""Shared slowapi limiter."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from microscroll.config import get_settings

_settings = get_settings()

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[_settings.RATE_LIMIT_DEFAULT],
    enabled=_settings.RATE_LIMIT_ENABLED,
)
