"""Infrastructure layer implementations for kvadapter."""

from kvadapter.infrastructure.backends import InMemoryCommands
from kvadapter.infrastructure.serializers import JsonSerializer

__all__ = [
    "InMemoryCommands",
    "JsonSerializer",
]
