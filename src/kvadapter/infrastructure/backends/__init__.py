"""Command backend implementations."""

from kvadapter.infrastructure.backends.memory import InMemoryCommands

__all__ = ["InMemoryCommands"]
