"""Shared fixtures: fake Gemini client, stores and the API test client."""

from types import SimpleNamespace

import pytest

from job_finder.config import settings
from job_finder.models import ParsedResumeData
from job_finder.store import InMemoryStorage, PreferenceStore, dispose_engine, get_session_factory, init_db

WELL_FORMED_ANALYSIS = {
    "jobName": "Engineer",
    "experienceYears": "5",
    "skills": "Go,SQL",
    "certifications": "None",
    "atsScore": 72,
    "atsRecommendations": ["Add metrics"],
}

GROUPED_TEXT = (
    "# Group: Remote Roles\n"
    "**Summary**: strong remote demand\n"
    "* Backend Engineer at Acme - Remote ([Apply](https://acme.example/jobs/1))"
)


class FakeModels:
    """Stands in for client.aio.models; replays queued responses in order."""

    def __init__(self):
        self.responses = []
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if not self.responses:
            raise RuntimeError("No fake response queued")
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class FakeClient:
    def __init__(self, *responses):
        self.aio = SimpleNamespace(models=FakeModels())
        self.queue(*responses)

    def queue(self, *responses):
        self.aio.models.responses.extend(responses)

    @property
    def calls(self):
        return self.aio.models.calls


def web_chunk(uri, title=""):
    return SimpleNamespace(web=SimpleNamespace(uri=uri, title=title))


def fake_response(text, chunks=None):
    metadata = SimpleNamespace(grounding_chunks=chunks)
    return SimpleNamespace(text=text, candidates=[SimpleNamespace(grounding_metadata=metadata)])


@pytest.fixture
def profile():
    return ParsedResumeData.model_validate(WELL_FORMED_ANALYSIS)


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def store():
    return PreferenceStore(InMemoryStorage())


@pytest.fixture
def sqlite_db(tmp_path, monkeypatch):
    """Point the store at a fresh SQLite file and create the tables."""
    monkeypatch.setattr(settings, "database_url", f"sqlite:///{tmp_path / 'prefs.db'}")
    dispose_engine()
    init_db()
    yield get_session_factory()
    dispose_engine()


@pytest.fixture
def api(sqlite_db, fake_client):
    """TestClient with the fake Gemini client and rate limiting off."""
    from fastapi.testclient import TestClient

    from job_finder.api.app import app
    from job_finder.api.deps import clear_state, get_client
    from job_finder.api.limiter import limiter

    clear_state()
    limiter.enabled = False
    app.dependency_overrides[get_client] = lambda: fake_client
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
    limiter.enabled = settings.rate_limit_enabled
    clear_state()
