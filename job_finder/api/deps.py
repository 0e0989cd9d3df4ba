"""Shared API dependencies: model client, preference stores and wizard sessions."""

from cachetools import TTLCache
from fastapi import Depends, Header, HTTPException

from job_finder.agents.client import create_client
from job_finder.config import settings
from job_finder.models import Theme
from job_finder.store import PreferenceStore, SqlStorage, get_session_factory
from job_finder.wizard import WizardController

_client = None

# One store per client id so every route sees the same saved jobs.
# Evicted stores are reloaded from the database on next request.
_stores: TTLCache = TTLCache(maxsize=1000, ttl=settings.session_ttl_seconds)

# In-memory wizards (session_id -> (owner, controller))
# Bounded TTL cache: abandoned runs are dropped after an hour of inactivity.
_wizards: TTLCache = TTLCache(maxsize=settings.max_sessions, ttl=settings.session_ttl_seconds)


def get_client():
    """Get or create the shared Gemini client."""
    global _client
    if _client is None:
        try:
            _client = create_client()
        except ValueError as e:
            raise HTTPException(status_code=503, detail=str(e))
    return _client


def get_user_id(x_user_id: str = Header("local", alias="X-User-ID")) -> str:
    return x_user_id.strip() or "local"


def get_preference_store(namespace: str = Depends(get_user_id)) -> PreferenceStore:
    """Preference store for the calling client."""
    store = _stores.get(namespace)
    if store is None:
        storage = SqlStorage(get_session_factory(), namespace=namespace)
        store = PreferenceStore(storage, system_theme=Theme(settings.default_theme))
    # Re-set on every use so the expiry only counts idle time
    _stores[namespace] = store
    return store


def register_wizard(session_id: str, owner: str, wizard: WizardController) -> None:
    _wizards[session_id] = (owner, wizard)


def get_wizard(session_id: str, owner: str) -> WizardController:
    """Look up a wizard, checking the caller owns it."""
    entry = _wizards.get(session_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Session not found")
    session_owner, wizard = entry
    if session_owner != owner:
        raise HTTPException(status_code=403, detail="Access denied")
    # Touch the entry so active sessions do not expire
    _wizards[session_id] = entry
    return wizard


def get_session_wizard(
    session_id: str,
    user_id: str = Depends(get_user_id),
    store: PreferenceStore = Depends(get_preference_store),
) -> WizardController:
    """Wizard for the request, bound to the client's current preference store."""
    wizard = get_wizard(session_id, user_id)
    wizard.store = store
    return wizard


def clear_state() -> None:
    """Forget the client, stores and sessions (shutdown, tests)."""
    global _client
    _client = None
    _stores.clear()
    _wizards.clear()
