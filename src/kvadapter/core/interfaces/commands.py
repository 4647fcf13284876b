"""Command-execution capability for key-value backends."""

from datetime import timedelta
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class KeyValueCommands(Protocol):
    """Minimal command surface the adapter needs from a backend client.

    The method names and signatures follow ``redis.asyncio.Redis``, so a
    real client satisfies this protocol structurally. Replies are expected
    in decoded form (``decode_responses=True``). Failures are reported by
    raising ``redis.exceptions.RedisError`` subclasses.
    """

    async def get(self, name: str) -> str | None:
        """Return the value stored at ``name``, or None if absent."""
        ...

    async def set(
        self,
        name: str,
        value: str,
        ex: int | timedelta | None = None,
        px: int | timedelta | None = None,
    ) -> bool | None:
        """Store ``value`` at ``name`` with optional expiry."""
        ...

    async def hgetall(self, name: str) -> dict[str, str]:
        """Return all fields of the hash at ``name``; empty if absent."""
        ...

    async def hset(
        self,
        name: str,
        key: str | None = None,
        value: Any = None,
        mapping: dict[str, Any] | None = None,
    ) -> int:
        """Set hash fields, returning the number of fields added."""
        ...

    async def expire(self, name: str, time: int | timedelta) -> bool:
        """Set a timeout on ``name``; False if the key does not exist."""
        ...

    async def pexpire(self, name: str, time: int | timedelta) -> bool:
        """Set a timeout on ``name`` in milliseconds."""
        ...

    async def delete(self, *names: str) -> int:
        """Remove keys, returning how many existed."""
        ...

    async def exists(self, *names: str) -> int:
        """Count how many of ``names`` exist."""
        ...

    async def incrby(self, name: str, amount: int = 1) -> int:
        """Increment the integer at ``name`` by ``amount``."""
        ...

    async def decrby(self, name: str, amount: int = 1) -> int:
        """Decrement the integer at ``name`` by ``amount``."""
        ...

    async def keys(self, pattern: str = "*") -> list[str]:
        """List keys matching a glob-style pattern."""
        ...

    async def ttl(self, name: str) -> int:
        """Remaining seconds to live; -2 if absent, -1 if no expiry."""
        ...

    async def ping(self) -> bool:
        """Check that the backend is reachable."""
        ...

    async def aclose(self) -> None:
        """Release the connection."""
        ...
