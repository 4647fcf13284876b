"""Serializer interface."""

from typing import Any, Protocol


class ISerializer(Protocol):
    """Contract for encoding/decoding scalar entries.

    Serializers handle the conversion between Python objects
    and the text payload stored under a key.
    """

    def serialize(self, value: Any) -> str:
        """Serialize value to a text payload.

        Args:
            value: The Python object to serialize.

        Returns:
            The serialized payload.

        Raises:
            EncodeError: If the value cannot be serialized.
        """
        ...

    def deserialize(self, data: str | bytes) -> Any:
        """Deserialize a stored payload to a value.

        Args:
            data: The payload as returned by the backend.

        Returns:
            The deserialized Python object.

        Raises:
            DecodeError: If the payload cannot be deserialized.
        """
        ...
