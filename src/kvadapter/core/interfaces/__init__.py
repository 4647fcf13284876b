"""Core interfaces (Protocol classes) for kvadapter."""

from kvadapter.core.interfaces.commands import KeyValueCommands
from kvadapter.core.interfaces.serializer import ISerializer

__all__ = [
    "KeyValueCommands",
    "ISerializer",
]
