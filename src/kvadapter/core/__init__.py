"""Core domain layer for kvadapter."""

from kvadapter.core.entities import TTL_KEY_MISSING, TTL_NO_EXPIRY, RedisConfig
from kvadapter.core.interfaces import ISerializer, KeyValueCommands
from kvadapter.core.services import KeyValueAdapter

__all__ = [
    # Entities
    "RedisConfig",
    "TTL_KEY_MISSING",
    "TTL_NO_EXPIRY",
    # Interfaces
    "ISerializer",
    "KeyValueCommands",
    # Services
    "KeyValueAdapter",
]
