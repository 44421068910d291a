"""Per-client request limiting.

Separated from main.py to avoid circular imports when endpoints
need to apply per-route rate limits. This is a coarse per-IP guard and is
independent of the per-address claim cooldown.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from faucet.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def request_rate_limit() -> str:
    """Per-IP limit for claim requests, read from settings."""
    return get_settings().request_rate_limit
