"""Persistence collaborators for user progress"""

from landlord.db.store import (
    InMemoryProgressStore,
    JsonFileProgressStore,
    ProgressStore,
    create_store,
)

__all__ = [
    "InMemoryProgressStore",
    "JsonFileProgressStore",
    "ProgressStore",
    "create_store",
]
