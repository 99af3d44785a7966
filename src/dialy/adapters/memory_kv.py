"""In-memory key-value storage adapter."""


class MemoryKeyValueStore:
    """
    Dict-backed key-value storage.

    Implements KeyValueStore protocol. Nothing outlives the process; used
    when no durable store is configured and in tests.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self.items: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.items.get(key)

    def set(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove(self, key: str) -> None:
        self.items.pop(key, None)
