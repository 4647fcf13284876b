"""Domain entities for kvadapter."""

from kvadapter.core.entities.config import RedisConfig
from kvadapter.core.entities.ttl import TTL_KEY_MISSING, TTL_NO_EXPIRY

__all__ = [
    "RedisConfig",
    "TTL_KEY_MISSING",
    "TTL_NO_EXPIRY",
]
