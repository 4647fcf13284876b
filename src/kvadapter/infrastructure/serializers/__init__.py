"""Serializer implementations."""

from kvadapter.infrastructure.serializers.json import JsonSerializer

__all__ = ["JsonSerializer"]
