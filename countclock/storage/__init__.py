"""Storage package."""

from .backends import (
    KeyValueStore,
    MemoryStore,
    JsonFileStore,
    DatabaseStore,
    open_store,
)
from .targets import SavedTarget, SavedTargetStore, STORAGE_KEY

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "DatabaseStore",
    "open_store",
    "SavedTarget",
    "SavedTargetStore",
    "STORAGE_KEY",
]
