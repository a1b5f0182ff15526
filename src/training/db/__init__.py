"""Storage backends.

Provides:
- KeyValueStore interface shared by the identity and progress stores
- MemoryStore (default) and SqliteStore implementations
"""

from training.db.stores import KeyValueStore, MemoryStore, SqliteStore, create_store

__all__ = ["KeyValueStore", "MemoryStore", "SqliteStore", "create_store"]
