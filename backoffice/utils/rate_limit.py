"""Shared rate limiter used by the application and login routes."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from backoffice.config import get_settings

_settings = get_settings()

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[_settings.default_rate_limit],
    enabled=_settings.rate_limit_enabled,
)

LOGIN_LIMIT = _settings.login_rate_limit
