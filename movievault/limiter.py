
from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import settings

# key_func: identifies the client (IP address)
# storage_uri: "memory://" for a single process, a redis:// URI to share limits
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    enabled=settings.RATE_LIMIT_ENABLED,
)

REGISTER_LIMIT = "5/minute"
LOGIN_LIMIT = "10/minute"
