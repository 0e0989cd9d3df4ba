"""Preference storage package."""

from job_finder.store.base import Base, dispose_engine, get_engine, get_session_factory, init_db
from job_finder.store.preference_store import (
    InMemoryStorage,
    KeyValueStorage,
    PreferenceStore,
    SqlStorage,
)
from job_finder.store.tables import PreferenceEntry

__all__ = [
    "Base",
    "get_engine",
    "get_session_factory",
    "init_db",
    "dispose_engine",
    "PreferenceEntry",
    "KeyValueStorage",
    "InMemoryStorage",
    "SqlStorage",
    "PreferenceStore",
]
