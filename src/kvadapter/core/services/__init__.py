"""Domain services for kvadapter."""

from kvadapter.core.services.adapter import KeyValueAdapter

__all__ = ["KeyValueAdapter"]
