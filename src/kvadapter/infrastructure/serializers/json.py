"""JSON serializer implementation."""

import json
from typing import Any

from kvadapter.exceptions import DecodeError, EncodeError


class JsonSerializer:
    """JSON serializer for scalar entries.

    Produces compact JSON text (``"value1"``, ``{"a":1}``) and
    rejects anything that is not plain JSON data, including
    NaN and infinities.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the JSON serializer.

        Args:
            encoding: Character encoding used to decode byte payloads.
        """
        self._encoding = encoding

    def serialize(self, value: Any) -> str:
        """Serialize value to JSON text.

        Args:
            value: The Python object to serialize.

        Returns:
            The JSON text.

        Raises:
            EncodeError: If the value cannot be serialized.
        """
        try:
            return json.dumps(
                value,
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError, RecursionError) as e:
            raise EncodeError(f"Failed to serialize value: {e}") from e

    def deserialize(self, data: str | bytes) -> Any:
        """Deserialize JSON text to value.

        Args:
            data: The JSON payload, as text or bytes.

        Returns:
            The deserialized Python object.

        Raises:
            DecodeError: If the data cannot be deserialized.
        """
        try:
            if isinstance(data, bytes):
                data = data.decode(self._encoding)
            return json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Failed to deserialize data: {e}") from e
