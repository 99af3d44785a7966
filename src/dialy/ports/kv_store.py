"""Key-value storage interface."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Interface for a durable string slot per key."""

    def get(self, key: str) -> str | None:
        """Read the value stored under key. Returns None if not set."""
        ...

    def set(self, key: str, value: str) -> None:
        """Overwrite the value stored under key in one step."""
        ...

    def remove(self, key: str) -> None:
        """Delete the value stored under key, if any."""
        ...
