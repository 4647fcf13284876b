"""In-memory command backend implementation."""

import fnmatch
import math
import re
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from cachetools import TLRUCache  # type: ignore[import-untyped]
from redis import exceptions

WRONGTYPE = "WRONGTYPE Operation against a key holding the wrong kind of value"
NOT_AN_INTEGER = "value is not an integer or out of range"
OVERFLOW = "increment or decrement would overflow"
OUT_OF_MEMORY = "OOM command not allowed when used memory > 'maxmemory'."

# Redis accepts only canonical decimal integers: no sign other than "-",
# no leading zeros, no whitespace or underscores.
_INTEGER = re.compile(r"(0|-?[1-9][0-9]*)")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class _Entry:
    value: str | dict[str, str]
    expires_at: float = math.inf


def _entry_expiry(key: str, entry: _Entry, now: float) -> float:
    return entry.expires_at


class InMemoryCommands:
    """In-process implementation of ``KeyValueCommands``.

    Behaves like a single Redis database for the commands the adapter
    uses: string and hash values, per-key expiry, and Redis-style
    error replies (``WRONGTYPE``, non-integer counters). Replies are in
    decoded form, as with ``decode_responses=True``.

    Suitable for tests and single-process use. Uses cachetools'
    TLRUCache for per-item expiration. Live keys are never evicted: once
    ``maxsize`` keys are held, writes that would add a key fail with an
    ``OOM`` error, like a Redis server under the noeviction policy.
    """

    def __init__(
        self,
        maxsize: int = 10000,
        timer: Any = time.monotonic,
    ) -> None:
        """Initialize the in-memory backend.

        Args:
            maxsize: Maximum number of keys held.
            timer: Clock returning seconds; injectable for tests.
        """
        self._maxsize = maxsize
        self._cache: TLRUCache[str, _Entry] = TLRUCache(
            maxsize=maxsize,
            ttu=_entry_expiry,
            timer=timer,
        )
        self._closed = False

    async def get(self, name: str) -> str | None:
        """Return the string stored at name, or None."""
        entry = self._lookup(name)
        if entry is None:
            return None
        if not isinstance(entry.value, str):
            raise exceptions.ResponseError(WRONGTYPE)
        return entry.value

    async def set(
        self,
        name: str,
        value: Any,
        ex: int | timedelta | None = None,
        px: int | timedelta | None = None,
    ) -> bool:
        """Store a string, replacing whatever was at name."""
        self._check_open()
        payload = _encode(value)
        expires_at = math.inf
        if ex is not None:
            expires_at = self._now() + _seconds(ex)
        elif px is not None:
            millis = px.total_seconds() * 1000 if isinstance(px, timedelta) else px
            expires_at = self._now() + millis / 1000
        self._store(name, _Entry(payload, expires_at))
        return True

    async def hgetall(self, name: str) -> dict[str, str]:
        """Return a copy of the hash at name; empty if absent."""
        entry = self._lookup(name)
        if entry is None:
            return {}
        if not isinstance(entry.value, dict):
            raise exceptions.ResponseError(WRONGTYPE)
        return dict(entry.value)

    async def hset(
        self,
        name: str,
        key: str | None = None,
        value: Any = None,
        mapping: dict[str, Any] | None = None,
    ) -> int:
        """Set hash fields and return the number of new fields."""
        self._check_open()
        items: dict[str, Any] = {}
        if key is not None:
            items[key] = value
        if mapping:
            items.update(mapping)
        if not items:
            raise exceptions.DataError("'hset' with no key value pairs")
        encoded = {str(field): _encode(val) for field, val in items.items()}

        entry = self._lookup(name)
        if entry is None:
            fields: dict[str, str] = {}
            expires_at = math.inf
        elif isinstance(entry.value, dict):
            fields = dict(entry.value)
            expires_at = entry.expires_at
        else:
            raise exceptions.ResponseError(WRONGTYPE)

        added = sum(1 for field in encoded if field not in fields)
        fields.update(encoded)
        self._store(name, _Entry(fields, expires_at))
        return added

    async def expire(self, name: str, time: int | timedelta) -> bool:
        """Set a timeout on name. Returns False if name does not exist."""
        entry = self._lookup(name)
        if entry is None:
            return False
        return self._set_timeout(name, entry, _seconds(time))

    async def pexpire(self, name: str, time: int | timedelta) -> bool:
        """Set a timeout on name in milliseconds."""
        entry = self._lookup(name)
        if entry is None:
            return False
        millis = time.total_seconds() * 1000 if isinstance(time, timedelta) else time
        return self._set_timeout(name, entry, int(millis) / 1000)

    async def delete(self, *names: str) -> int:
        """Remove names and return how many existed."""
        self._require_args("del", names)
        removed = 0
        for name in names:
            if self._cache.pop(name, None) is not None:
                removed += 1
        return removed

    async def exists(self, *names: str) -> int:
        """Count existing names; repeated names count each time."""
        self._require_args("exists", names)
        return sum(1 for name in names if self._lookup(name) is not None)

    async def incrby(self, name: str, amount: int = 1) -> int:
        """Add amount to the integer at name, creating it at 0."""
        entry = self._lookup(name)
        if entry is None:
            current, expires_at = 0, math.inf
        elif isinstance(entry.value, str):
            current = _parse_integer(entry.value)
            expires_at = entry.expires_at
        else:
            raise exceptions.ResponseError(WRONGTYPE)

        result = current + amount
        if not _INT64_MIN <= result <= _INT64_MAX:
            raise exceptions.ResponseError(OVERFLOW)
        self._store(name, _Entry(str(result), expires_at))
        return result

    async def decrby(self, name: str, amount: int = 1) -> int:
        """Subtract amount from the integer at name."""
        return await self.incrby(name, -amount)

    async def keys(self, pattern: str = "*") -> list[str]:
        """List live keys matching a glob-style pattern."""
        self._check_open()
        self._cache.expire()
        return [key for key in list(self._cache) if fnmatch.fnmatchcase(key, pattern)]

    async def ttl(self, name: str) -> int:
        """Remaining whole seconds; -2 if absent, -1 if no expiry."""
        entry = self._lookup(name)
        if entry is None:
            return -2
        if entry.expires_at == math.inf:
            return -1
        return math.ceil(entry.expires_at - self._now())

    async def ping(self) -> bool:
        """Return True while the backend is open."""
        self._check_open()
        return True

    async def aclose(self) -> None:
        """Close the backend; later commands raise ConnectionError."""
        self._closed = True

    @property
    def closed(self) -> bool:
        """Return whether aclose() has been called."""
        return self._closed

    @property
    def maxsize(self) -> int:
        """Return the maximum number of keys."""
        return self._maxsize

    def __len__(self) -> int:
        """Return the number of live keys."""
        self._cache.expire()
        return len(self._cache)

    def _lookup(self, name: str) -> _Entry | None:
        self._check_open()
        entry: _Entry | None = self._cache.get(name)
        return entry

    def _store(self, name: str, entry: _Entry) -> None:
        # TLRUCache silently skips items that are already expired
        if entry.expires_at <= self._now():
            self._cache.pop(name, None)
            return
        if name not in self._cache and len(self) >= self._maxsize:
            raise exceptions.ResponseError(OUT_OF_MEMORY)
        self._cache[name] = entry

    def _set_timeout(self, name: str, entry: _Entry, seconds: float) -> bool:
        if seconds <= 0:
            self._cache.pop(name, None)
        else:
            self._store(name, _Entry(entry.value, self._now() + seconds))
        return True

    def _now(self) -> float:
        now: float = self._cache.timer()
        return now

    def _check_open(self) -> None:
        if self._closed:
            raise exceptions.ConnectionError("Connection closed by client.")

    def _require_args(self, command: str, names: tuple[str, ...]) -> None:
        self._check_open()
        if not names:
            raise exceptions.ResponseError(
                f"wrong number of arguments for '{command}' command"
            )


def _encode(value: Any) -> str:
    """Coerce a command argument the way redis-py's encoder does."""
    if isinstance(value, bool):
        raise exceptions.DataError(
            "Invalid input of type: 'bool'. Convert to a bytes, string, int or float first."
        )
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, memoryview)):
        return bytes(value).decode("utf-8")
    if isinstance(value, (int, float)):
        return repr(value)
    raise exceptions.DataError(
        f"Invalid input of type: '{type(value).__name__}'. "
        "Convert to a bytes, string, int or float first."
    )


def _seconds(value: int | timedelta) -> int:
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    return int(value)


def _parse_integer(value: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise exceptions.ResponseError(NOT_AN_INTEGER)
    number = int(value)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise exceptions.ResponseError(NOT_AN_INTEGER)
    return number
