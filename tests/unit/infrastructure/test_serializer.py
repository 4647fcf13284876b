"""Tests for JsonSerializer."""

import pytest

from kvadapter import DecodeError, EncodeError, SerializationError
from kvadapter.infrastructure.serializers.json import JsonSerializer


class TestJsonSerializer:
    """Tests for JsonSerializer."""

    @pytest.fixture
    def serializer(self) -> JsonSerializer:
        """Create a serializer for testing."""
        return JsonSerializer()

    def test_serialize_string(self, serializer: JsonSerializer) -> None:
        """Strings are stored as JSON string literals."""
        assert serializer.serialize("value1") == '"value1"'

    def test_serialize_dict_compact(self, serializer: JsonSerializer) -> None:
        result = serializer.serialize({"name": "Alice", "age": 30})

        assert result == '{"name":"Alice","age":30}'

    def test_non_ascii_kept(self, serializer: JsonSerializer) -> None:
        assert serializer.serialize("café") == '"café"'

    def test_deserialize_dict(self, serializer: JsonSerializer) -> None:
        """Test deserializing to a dictionary."""
        result = serializer.deserialize('{"name": "Alice", "age": 30}')

        assert result == {"name": "Alice", "age": 30}

    def test_deserialize_bytes(self, serializer: JsonSerializer) -> None:
        assert serializer.deserialize(b'["a", 1]') == ["a", 1]

    def test_roundtrip_nested(self, serializer: JsonSerializer) -> None:
        original = {
            "users": [
                {"id": 1, "name": "Alice", "active": True},
                {"id": 2, "name": "Bob", "score": 4.5, "manager": None},
            ],
            "count": 2,
        }

        assert serializer.deserialize(serializer.serialize(original)) == original

    def test_serialize_none(self, serializer: JsonSerializer) -> None:
        assert serializer.serialize(None) == "null"
        assert serializer.deserialize("null") is None

    def test_deserialize_invalid_json(self, serializer: JsonSerializer) -> None:
        """Test deserializing invalid JSON raises error."""
        with pytest.raises(DecodeError):
            serializer.deserialize("not valid json")

    def test_deserialize_invalid_encoding(self, serializer: JsonSerializer) -> None:
        """Test deserializing invalid encoding raises error."""
        with pytest.raises(DecodeError):
            serializer.deserialize(b"\xff\xfe")

    def test_serialize_circular(self, serializer: JsonSerializer) -> None:
        """Circular references can't be serialized."""
        circular: dict = {}
        circular["self"] = circular
        with pytest.raises(EncodeError):
            serializer.serialize(circular)

    def test_serialize_function(self, serializer: JsonSerializer) -> None:
        with pytest.raises(EncodeError):
            serializer.serialize(print)

    def test_serialize_infinity(self, serializer: JsonSerializer) -> None:
        """NaN and infinities are not valid JSON."""
        with pytest.raises(EncodeError):
            serializer.serialize({"x": float("inf")})

    def test_errors_share_base(self) -> None:
        assert issubclass(EncodeError, SerializationError)
        assert issubclass(DecodeError, SerializationError)

    def test_custom_encoding(self) -> None:
        """Byte payloads are decoded with the configured encoding."""
        serializer = JsonSerializer(encoding="utf-16")

        assert serializer.deserialize('{"name": "Alice"}'.encode("utf-16")) == {"name": "Alice"}
