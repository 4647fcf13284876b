"""Key-value adapter - typed operations over a command client."""

import functools
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import timedelta
from typing import Any

import redis.asyncio as redis
import structlog
from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError
from redis.exceptions import ConnectionError as ClientConnectionError
from redis.exceptions import RedisError

from kvadapter.core.entities.config import RedisConfig
from kvadapter.core.interfaces.commands import KeyValueCommands
from kvadapter.core.interfaces.serializer import ISerializer
from kvadapter.exceptions import BackendError, DecodeError, NotFoundError
from kvadapter.infrastructure.serializers.json import JsonSerializer

logger = structlog.get_logger()

Expiry = timedelta | int | float


class KeyValueAdapter:
    """Typed facade over a key-value command client.

    Every call is a single round trip to the backend. The adapter keeps
    no state besides the command handle, its serializer and whether it
    has been closed, so one instance may be shared by concurrent tasks as
    long as the underlying client allows it (``redis.asyncio.Redis`` does).

    Once :meth:`aclose` has been called every operation fails with
    ``BackendError``; redis-py would otherwise reconnect on demand.

    Cancellation of the calling task propagates unchanged; the adapter
    adds no timeouts and performs no retries.
    """

    def __init__(
        self,
        commands: KeyValueCommands,
        serializer: ISerializer | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            commands: Connected command client (real or test double).
            serializer: Serializer for scalar entries. Defaults to JSON.
        """
        self._commands = commands
        self._serializer = serializer or JsonSerializer()
        self._closed = False

    @classmethod
    def from_config(
        cls,
        config: RedisConfig,
        serializer: ISerializer | None = None,
    ) -> "KeyValueAdapter":
        """Build an adapter backed by a Redis client.

        The client connects lazily on the first command.

        Args:
            config: Connection settings.
            serializer: Optional serializer override.

        Returns:
            A ready-to-use adapter.
        """
        client = redis.from_url(  # type: ignore
            config.url,
            password=config.password or None,
            decode_responses=True,
        )
        logger.debug("redis client created", addr=config.addr, db=config.db)
        return cls(client, serializer=serializer)

    @classmethod
    def connect(
        cls,
        address: str,
        port: int,
        password: str = "",
        db: int = 0,
    ) -> "KeyValueAdapter":
        """Build an adapter from an address, port and optional password."""
        config = RedisConfig(address=address, port=port, password=password, db=db)
        return cls.from_config(config)

    @property
    def commands(self) -> KeyValueCommands:
        """The underlying command handle."""
        return self._commands

    async def get(self, key: str, target: Any = None) -> Any:
        """Fetch and decode the value stored at key.

        Validation against ``target`` is strict: a JSON string ``"123"``
        does not satisfy ``int``.

        Args:
            key: The key to read.
            target: Optional type the decoded JSON must fit, e.g.
                ``dict[str, int]`` or a pydantic model.

        Returns:
            The decoded value, validated into ``target`` when given.

        Raises:
            NotFoundError: If the key does not exist.
            DecodeError: If the payload is not valid JSON for ``target``.
            BackendError: On any backend failure.
            TypeError: If ``target`` is not a type pydantic can validate;
                raised before any backend call.
        """
        adapter = _type_adapter(target) if target is not None else None
        with self._translate("get", key):
            raw = await self._commands.get(key)
        if raw is None:
            raise NotFoundError(key)

        value = self._serializer.deserialize(raw)
        if adapter is None:
            return value
        try:
            return adapter.validate_python(value, strict=True)
        except ValidationError as e:
            raise DecodeError(f"Stored value does not match {target!r}: {e}") from e

    async def put(self, key: str, value: Any, ttl: Expiry | None = None) -> None:
        """Encode value as JSON and store it at key.

        Encoding happens before any backend call, so an unencodable
        value never results in a write.

        Args:
            key: The key to write.
            value: Any JSON-serializable value.
            ttl: Time-to-live as a timedelta or seconds. None or a
                non-positive duration means no expiry.

        Raises:
            EncodeError: If the value is not JSON-serializable.
            BackendError: On any backend failure.
        """
        payload = self._serializer.serialize(value)
        ex, px = _expiry_args(ttl)
        with self._translate("put", key):
            await self._commands.set(key, payload, ex=ex, px=px)

    async def hgetall(self, key: str) -> dict[str, str]:
        """Fetch every field of the hash at key.

        The backend replies with an empty mapping both for a missing key
        and for a hash without fields; both are reported as absent.

        Raises:
            NotFoundError: If no fields come back.
            BackendError: On any backend failure.
        """
        with self._translate("hgetall", key):
            fields = await self._commands.hgetall(key)
        if not fields:
            raise NotFoundError(key)
        return dict(fields)

    async def hset(self, key: str, mapping: dict[str, Any]) -> None:
        """Write several hash fields in a single command.

        Field values are stored as plain strings; numbers are converted
        by the client, other types are rejected.

        Raises:
            BackendError: On any backend or client-side input failure.
        """
        with self._translate("hset", key):
            await self._commands.hset(key, mapping=mapping)

    async def expire(self, key: str, ttl: Expiry) -> None:
        """Set a time-to-live on key. A missing key is not an error.

        Whole seconds go out as EXPIRE, finer durations as PEXPIRE. A
        non-positive ttl expires the key immediately, as EXPIRE 0 does.
        """
        ex, px = _expiry_args(ttl)
        with self._translate("expire", key):
            if px is not None:
                await self._commands.pexpire(key, px)
            else:
                await self._commands.expire(key, ex or 0)

    async def delete(self, *keys: str) -> int:
        """Remove keys and return how many were actually removed."""
        if not keys:
            self._ensure_open("delete", None)
            return 0
        with self._translate("delete", _describe(keys)):
            return int(await self._commands.delete(*keys))

    async def exists(self, *keys: str) -> bool:
        """Return True if at least one of keys exists."""
        if not keys:
            self._ensure_open("exists", None)
            return False
        with self._translate("exists", _describe(keys)):
            count = await self._commands.exists(*keys)
        return count > 0

    async def increment(self, key: str, delta: int = 1) -> int:
        """Atomically add delta to the counter at key."""
        with self._translate("increment", key):
            return int(await self._commands.incrby(key, delta))

    async def decrement(self, key: str, delta: int = 1) -> int:
        """Atomically subtract delta from the counter at key."""
        with self._translate("decrement", key):
            return int(await self._commands.decrby(key, delta))

    async def keys(self, pattern: str) -> list[str]:
        """List keys matching a glob-style pattern.

        Returns an empty list when nothing matches.
        """
        with self._translate("keys", pattern):
            return list(await self._commands.keys(pattern))

    async def ttl(self, key: str) -> timedelta:
        """Return the remaining time-to-live of key.

        Sentinels are passed through: ``TTL_KEY_MISSING`` (-2s) for an
        absent key and ``TTL_NO_EXPIRY`` (-1s) for a key without expiry.
        """
        with self._translate("ttl", key):
            seconds = await self._commands.ttl(key)
        return timedelta(seconds=seconds)

    async def ping(self) -> None:
        """Check that the backend is reachable.

        Raises:
            BackendError: If the backend cannot be reached.
        """
        with self._translate("ping", None):
            await self._commands.ping()

    async def aclose(self) -> None:
        """Close the underlying connection; later operations fail."""
        self._closed = True
        await self._commands.aclose()

    @property
    def closed(self) -> bool:
        """Return whether aclose() has been called."""
        return self._closed

    async def __aenter__(self) -> "KeyValueAdapter":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.aclose()

    @contextmanager
    def _translate(self, operation: str, key: str | None) -> Iterator[None]:
        """Turn client errors raised inside the block into BackendError."""
        self._ensure_open(operation, key)
        log = logger.bind(operation=operation, key=key)
        try:
            yield
        except RedisError as e:
            log.warning("backend command failed", error=str(e), error_type=type(e).__name__)
            raise BackendError(operation, key, str(e)) from e
        log.debug("backend command completed")

    def _ensure_open(self, operation: str, key: str | None) -> None:
        if self._closed:
            logger.warning("command on closed adapter", operation=operation, key=key)
            raise BackendError(operation, key, "connection closed") from ClientConnectionError(
                "Connection closed by client."
            )


def _expiry_args(ttl: Expiry | None) -> tuple[int | None, int | None]:
    """Split a ttl into whole seconds or milliseconds.

    Whole seconds go out as EX/EXPIRE, anything finer as PX/PEXPIRE.
    """
    if ttl is None:
        return None, None
    seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
    millis = round(seconds * 1000)
    if millis <= 0:
        return None, None
    if millis % 1000 == 0:
        return millis // 1000, None
    return None, millis


def _describe(keys: tuple[str, ...]) -> str:
    return keys[0] if len(keys) == 1 else ",".join(keys)


@functools.lru_cache(maxsize=128)
def _cached_type_adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def _type_adapter(target: Any) -> TypeAdapter[Any]:
    """Return a cached TypeAdapter for target.

    Raises:
        TypeError: If pydantic cannot build a schema for target.
    """
    try:
        return _cached_type_adapter(target)
    except PydanticSchemaGenerationError as e:
        raise TypeError(f"Cannot decode into {target!r}: {e}") from e
