"""Ports - interfaces/protocols for external dependencies."""

from .diary_repo import DiaryRepository
from .kv_store import KeyValueStore

__all__ = [
    "DiaryRepository",
    "KeyValueStore",
]
