"""Engine and session factory for the preference database."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from job_finder.config import settings


class Base(DeclarativeBase):
    pass


# Built on first use so importing the package never opens a connection
_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Store reads happen on FastAPI's threadpool as well as the event loop
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_recycle": 300}


def get_engine() -> Engine:
    """Get or create the engine for ``settings.database_url``."""
    global _engine
    if _engine is None:
        url = settings.database_url
        if not url:
            raise ValueError("DATABASE_URL not configured")
        _engine = create_engine(url, **_engine_options(url))
    return _engine


def get_session_factory() -> sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False)
    return _session_factory


def init_db() -> None:
    """Create the preference tables if they are missing."""
    from job_finder.store import tables  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def dispose_engine() -> None:
    """Close pooled connections and forget the engine (shutdown, tests)."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
