from slowapi import Limiter
from slowapi.util import get_remote_address

from taplist.config import settings


def default_rate_limit() -> str:
    return settings.rate_limit


def login_rate_limit() -> str:
    return settings.login_rate_limit


# Limits are resolved per request
limiter = Limiter(key_func=get_remote_address, default_limits=[default_rate_limit])
