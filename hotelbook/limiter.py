from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import Settings

# Keyed by client address; create_app applies the settings it was built with
limiter = Limiter(key_func=get_remote_address)

_auth_limit = Settings.RATE_LIMIT_AUTH_API


def configure_limiter(settings: Settings) -> Limiter:
    global _auth_limit
    _auth_limit = settings.RATE_LIMIT_AUTH_API
    limiter.enabled = settings.RATE_LIMIT_ENABLED
    return limiter


def auth_limit() -> str:
    """Limit string for register/login, resolved on every request."""
    return _auth_limit
