"""Adapters - I/O implementations of ports."""

from .file_kv import FileKeyValueStore
from .kv_diary_repo import STORAGE_KEY, STORAGE_VERSION, KeyValueDiaryRepository
from .memory_kv import MemoryKeyValueStore

__all__ = [
    "FileKeyValueStore",
    "MemoryKeyValueStore",
    "KeyValueDiaryRepository",
    "STORAGE_KEY",
    "STORAGE_VERSION",
]
