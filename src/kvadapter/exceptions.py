"""Error taxonomy for kvadapter.

Every error raised by :class:`~kvadapter.KeyValueAdapter` derives from
:class:`KeyValueError`, so callers can catch the whole family at once.
"""


class KeyValueError(Exception):
    """Base class for all adapter errors."""

    pass


class NotFoundError(KeyValueError):
    """Raised when the backend reports that a key or hash is absent."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Key not found: {key!r}")


class SerializationError(KeyValueError):
    """Raised when serialization or deserialization fails."""

    pass


class EncodeError(SerializationError):
    """Raised when a value cannot be encoded for storage."""

    pass


class DecodeError(SerializationError):
    """Raised when a stored payload cannot be decoded."""

    pass


class BackendError(KeyValueError):
    """Raised for any transport, protocol or connection failure.

    The original client exception is available as ``__cause__``.
    """

    def __init__(self, operation: str, key: str | None, message: str) -> None:
        self.operation = operation
        self.key = key
        target = f" {key!r}" if key is not None else ""
        super().__init__(f"{operation}{target} failed: {message}")
