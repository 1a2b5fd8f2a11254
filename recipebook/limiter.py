from slowapi import Limiter
from slowapi.util import get_remote_address

from .settings import settings

# Rate limiter (per-IP), registered on app.state in main
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit_default])
