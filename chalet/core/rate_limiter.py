"""
Shared slowapi limiter.

Lives outside main.py so the reservation router can decorate its write
endpoints without importing the app.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from chalet.core.config import settings

# Per client IP; RATE_LIMIT_ENABLED=false turns every limit off
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)

# Applied to POST /reservations
RESERVATION_LIMIT = settings.rate_limit_reservations
