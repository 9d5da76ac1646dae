"""Rate Limiting - per-client request limit on the enhance endpoint.

Invariants:
    - Clients are keyed by remote address
    - Counters live in process memory (fixed window)
    - The limit string is read from settings on every request
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import get_settings


def enhance_rate_limit() -> str:
    return get_settings().rate_limit


limiter = Limiter(
    key_func=get_remote_address,
    strategy="fixed-window",
    enabled=get_settings().rate_limit_enabled,
)
