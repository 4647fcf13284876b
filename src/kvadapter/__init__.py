"""kvadapter - Typed key-value adapter over a Redis client.

A small async library exposing string get/put with JSON encoding,
hash fields, expiry, counters, key listing, TTL inspection and a
liveness ping on top of redis-py, with a compact error taxonomy.

Example:
    from kvadapter import KeyValueAdapter, NotFoundError

    async with KeyValueAdapter.connect("localhost", 6379) as kv:
        await kv.put("user:1", {"name": "Alice"}, ttl=300)
        user = await kv.get("user:1")

        try:
            await kv.get("user:2")
        except NotFoundError:
            ...

Testing without a server:
    from kvadapter import InMemoryCommands, KeyValueAdapter

    kv = KeyValueAdapter(InMemoryCommands())
"""

from kvadapter.core.entities import TTL_KEY_MISSING, TTL_NO_EXPIRY, RedisConfig
from kvadapter.core.interfaces import ISerializer, KeyValueCommands
from kvadapter.core.services import KeyValueAdapter
from kvadapter.exceptions import (
    BackendError,
    DecodeError,
    EncodeError,
    KeyValueError,
    NotFoundError,
    SerializationError,
)
from kvadapter.infrastructure import InMemoryCommands, JsonSerializer

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "RedisConfig",
    "TTL_KEY_MISSING",
    "TTL_NO_EXPIRY",
    # Core interfaces
    "ISerializer",
    "KeyValueCommands",
    # Core services
    "KeyValueAdapter",
    # Infrastructure implementations
    "InMemoryCommands",
    "JsonSerializer",
    # Errors
    "KeyValueError",
    "NotFoundError",
    "SerializationError",
    "EncodeError",
    "DecodeError",
    "BackendError",
]
