"""
Local preference store.

Keeps the theme choice and saved job listings for one client. Values are
stored as JSON text under fixed keys; reads happen once on load and every
mutation is written straight through. A missing, unreadable or corrupt
value falls back to its default instead of raising.
"""

import json
import logging
from typing import Protocol

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from job_finder.models import GroundingSource, Theme
from job_finder.store.tables import PreferenceEntry

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
SAVED_JOBS_KEY = "savedJobs"


class KeyValueStorage(Protocol):
    """Minimal string key-value storage."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InMemoryStorage:
    """Storage kept in a dict. Lives as long as the object does."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class SqlStorage:
    """Storage backed by the preference_entries table, one namespace per client."""

    def __init__(self, session_factory: sessionmaker, namespace: str = "local"):
        self.session_factory = session_factory
        self.namespace = namespace

    def get_item(self, key: str) -> str | None:
        with self.session_factory() as db:
            entry = db.get(PreferenceEntry, (self.namespace, key))
            return entry.value if entry else None

    def set_item(self, key: str, value: str) -> None:
        with self.session_factory() as db:
            entry = db.get(PreferenceEntry, (self.namespace, key))
            if entry:
                entry.value = value
            else:
                db.add(PreferenceEntry(namespace=self.namespace, key=key, value=value))
            db.commit()

    def remove_item(self, key: str) -> None:
        with self.session_factory() as db:
            entry = db.get(PreferenceEntry, (self.namespace, key))
            if entry:
                db.delete(entry)
                db.commit()


class PreferenceStore:
    """Theme and saved jobs for one client, persisted through a KeyValueStorage."""

    def __init__(self, storage: KeyValueStorage, system_theme: Theme = Theme.DARK):
        self.storage = storage
        self.system_theme = system_theme
        self._theme = self._load_theme()
        self._saved: dict[str, GroundingSource] = self._load_saved_jobs()

    # Loading

    def _read_json(self, key: str):
        try:
            raw = self.storage.get_item(key)
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Could not read '{key}' from storage: {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.warning(f"Ignoring corrupt value stored under '{key}'")
            return None

    def _load_theme(self) -> Theme:
        value = self._read_json(THEME_KEY)
        try:
            return Theme(value)
        except ValueError:
            return self.system_theme

    def _load_saved_jobs(self) -> dict[str, GroundingSource]:
        value = self._read_json(SAVED_JOBS_KEY)
        saved: dict[str, GroundingSource] = {}
        if not isinstance(value, list):
            return saved
        for item in value:
            try:
                source = GroundingSource.model_validate(item)
            except ValidationError:
                continue
            # First occurrence wins; keeps the uri-uniqueness invariant
            saved.setdefault(source.uri, source)
        return saved

    # Theme

    @property
    def theme(self) -> Theme:
        return self._theme

    def set_theme(self, theme: Theme) -> Theme:
        theme = Theme(theme)
        self.storage.set_item(THEME_KEY, json.dumps(theme.value))
        self._theme = theme
        return self._theme

    def toggle_theme(self) -> Theme:
        return self.set_theme(Theme.LIGHT if self._theme == Theme.DARK else Theme.DARK)

    # Saved jobs

    @property
    def saved_jobs(self) -> list[GroundingSource]:
        return list(self._saved.values())

    def is_saved(self, uri: str) -> bool:
        return uri in self._saved

    def toggle_save(self, source: GroundingSource) -> bool:
        """
        Save the source if absent, remove it if present. Returns the new saved state.

        The in-memory set only changes once the write has succeeded.
        """
        saved = dict(self._saved)
        if source.uri in saved:
            del saved[source.uri]
        else:
            saved[source.uri] = source
        self._write_saved_jobs(saved)
        self._saved = saved
        return source.uri in saved

    def _write_saved_jobs(self, saved: dict[str, GroundingSource]) -> None:
        payload = [s.model_dump() for s in saved.values()]
        self.storage.set_item(SAVED_JOBS_KEY, json.dumps(payload))
