"""TTL sentinel durations."""

from datetime import timedelta

# Reported by TTL when the key does not exist.
TTL_KEY_MISSING = timedelta(seconds=-2)

# Reported by TTL when the key exists but has no expiry.
TTL_NO_EXPIRY = timedelta(seconds=-1)
