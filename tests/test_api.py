import json

from conftest import GROUPED_TEXT, WELL_FORMED_ANALYSIS, fake_response, web_chunk
from job_finder.errors import ANALYSIS_FAILED_MESSAGE, EMPTY_LOCATION_MESSAGE, UNSUPPORTED_FILE_MESSAGE

PDF_UPLOAD = {"file": ("resume.pdf", b"%PDF-1.7 resume", "application/pdf")}


def start(api, user="alice"):
    response = api.post("/wizard", headers={"X-User-ID": user})
    assert response.status_code == 200
    return response.json()["session_id"]


def analyzed_session(api, fake_client, user="alice"):
    fake_client.queue(fake_response(json.dumps(WELL_FORMED_ANALYSIS)))
    session_id = start(api, user)
    response = api.post(f"/wizard/{session_id}/resume", files=PDF_UPLOAD, headers={"X-User-ID": user})
    assert response.json()["step"] == "CONFIRM_DETAILS"
    return session_id


def searched_session(api, fake_client, user="alice"):
    session_id = analyzed_session(api, fake_client, user)
    fake_client.queue(fake_response(GROUPED_TEXT, [web_chunk("https://acme.example/jobs/1", "Acme")]))
    response = api.post(
        f"/wizard/{session_id}/preferences",
        json={"location": "Berlin", "interests": ""},
        headers={"X-User-ID": user},
    )
    assert response.json()["step"] == "RESULTS"
    return session_id


def test_health(api):
    assert api.get("/health").json() == {"status": "healthy"}


def test_new_wizard_starts_at_upload(api):
    session_id = start(api)

    state = api.get(f"/wizard/{session_id}", headers={"X-User-ID": "alice"}).json()

    assert state["step"] == "UPLOAD"
    assert state["resume_data"] is None
    assert state["has_results"] is False


def test_upload_returns_camel_case_profile(api, fake_client):
    session_id = analyzed_session(api, fake_client)

    state = api.get(f"/wizard/{session_id}", headers={"X-User-ID": "alice"}).json()

    assert state["resume_data"] == WELL_FORMED_ANALYSIS
    assert isinstance(state["resume_data"]["atsScore"], int)


def test_unsupported_upload_is_400(api, fake_client):
    session_id = start(api)

    response = api.post(
        f"/wizard/{session_id}/resume",
        files={"file": ("resume.txt", b"hello", "text/plain")},
        headers={"X-User-ID": "alice"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == UNSUPPORTED_FILE_MESSAGE
    assert fake_client.calls == []


def test_oversized_upload_is_400(api, fake_client, monkeypatch):
    from job_finder.config import settings

    monkeypatch.setattr(settings, "max_upload_size", 10)
    session_id = start(api)

    response = api.post(f"/wizard/{session_id}/resume", files=PDF_UPLOAD, headers={"X-User-ID": "alice"})

    assert response.status_code == 400
    assert fake_client.calls == []


def test_analysis_failure_reports_error_step(api, fake_client):
    fake_client.queue(ConnectionError("network down"))
    session_id = start(api)

    state = api.post(f"/wizard/{session_id}/resume", files=PDF_UPLOAD, headers={"X-User-ID": "alice"}).json()

    assert state["step"] == "ERROR"
    assert state["error_message"] == ANALYSIS_FAILED_MESSAGE
    assert state["resume_data"] is None


def test_profile_edit(api, fake_client):
    session_id = analyzed_session(api, fake_client)

    state = api.put(
        f"/wizard/{session_id}/profile",
        json={"jobName": "Staff Engineer", "skills": "Go,SQL,Kafka"},
        headers={"X-User-ID": "alice"},
    ).json()

    assert state["resume_data"]["jobName"] == "Staff Engineer"
    assert state["resume_data"]["skills"] == "Go,SQL,Kafka"
    assert state["resume_data"]["experienceYears"] == "5"


def test_empty_location_is_400_and_no_search(api, fake_client):
    session_id = analyzed_session(api, fake_client)

    response = api.post(
        f"/wizard/{session_id}/preferences",
        json={"location": "  ", "interests": "Fintech"},
        headers={"X-User-ID": "alice"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == EMPTY_LOCATION_MESSAGE
    assert len(fake_client.calls) == 1


def test_results_include_groups_and_saved_flags(api, fake_client):
    session_id = searched_session(api, fake_client)
    api.post(
        "/bookmarks/toggle",
        json={"uri": "https://acme.example/jobs/1", "title": "Acme"},
        headers={"X-User-ID": "alice"},
    )

    results = api.get(f"/wizard/{session_id}/results", headers={"X-User-ID": "alice"}).json()

    assert results["text"] == GROUPED_TEXT
    assert results["sources"] == [{"uri": "https://acme.example/jobs/1", "title": "Acme", "saved": True}]
    group = results["blocks"][0]
    assert group["kind"] == "group"
    assert group["title"] == "Remote Roles"
    assert group["items"][0][1] == {"kind": "link", "label": "Apply", "url": "https://acme.example/jobs/1"}


def test_results_before_search_is_404(api):
    session_id = start(api)

    assert api.get(f"/wizard/{session_id}/results", headers={"X-User-ID": "alice"}).status_code == 404


def test_wrong_step_is_409(api):
    session_id = start(api)

    response = api.post(
        f"/wizard/{session_id}/preferences",
        json={"location": "Berlin"},
        headers={"X-User-ID": "alice"},
    )

    assert response.status_code == 409
    assert response.json()["step"] == "UPLOAD"


def test_reset_keeps_bookmarks(api, fake_client):
    session_id = searched_session(api, fake_client)
    api.post("/bookmarks/toggle", json={"uri": "https://acme.example/jobs/1"}, headers={"X-User-ID": "alice"})

    state = api.post(f"/wizard/{session_id}/reset", headers={"X-User-ID": "alice"}).json()

    assert state["step"] == "UPLOAD"
    assert state["has_results"] is False
    assert state["saved_count"] == 1
    bookmarks = api.get("/bookmarks", headers={"X-User-ID": "alice"}).json()["bookmarks"]
    assert bookmarks == [{"uri": "https://acme.example/jobs/1", "title": ""}]


def test_saved_view_round_trip(api, fake_client):
    session_id = searched_session(api, fake_client)

    opened = api.post(f"/wizard/{session_id}/saved", headers={"X-User-ID": "alice"}).json()
    closed = api.post(f"/wizard/{session_id}/saved/close", headers={"X-User-ID": "alice"}).json()

    assert opened["step"] == "SAVED_JOBS"
    assert closed["step"] == "RESULTS"


def test_sessions_are_private(api):
    session_id = start(api, user="alice")

    assert api.get(f"/wizard/{session_id}", headers={"X-User-ID": "bob"}).status_code == 403
    assert api.get("/wizard/missing", headers={"X-User-ID": "alice"}).status_code == 404


def test_bookmark_toggle_and_check(api):
    headers = {"X-User-ID": "alice"}
    job = {"uri": "https://globex.example/careers", "title": "Globex"}

    first = api.post("/bookmarks/toggle", json=job, headers=headers).json()
    check = api.get("/bookmarks/check", params={"uri": job["uri"]}, headers=headers).json()
    second = api.post("/bookmarks/toggle", json=job, headers=headers).json()

    assert first["saved"] is True
    assert first["bookmarks"] == [job]
    assert check == {"bookmarked": True}
    assert second["saved"] is False
    assert second["bookmarks"] == []
    assert api.get("/bookmarks", headers={"X-User-ID": "bob"}).json() == {"bookmarks": []}


def test_theme_defaults_and_persists(api):
    headers = {"X-User-ID": "alice"}

    assert api.get("/preferences/theme", headers=headers).json() == {"theme": "dark"}
    assert api.put("/preferences/theme", json={"theme": "light"}, headers=headers).json() == {"theme": "light"}
    assert api.post("/preferences/theme/toggle", headers=headers).json() == {"theme": "dark"}
    assert api.put("/preferences/theme", json={"theme": "purple"}, headers=headers).status_code == 422


def test_saved_flags_follow_bookmarks_after_store_eviction(api, fake_client):
    from job_finder.api import deps

    headers = {"X-User-ID": "alice"}
    session_id = searched_session(api, fake_client)
    deps._stores.clear()

    toggled = api.post("/bookmarks/toggle", json={"uri": "https://acme.example/jobs/1", "title": "Acme"}, headers=headers)
    results = api.get(f"/wizard/{session_id}/results", headers=headers).json()
    state = api.get(f"/wizard/{session_id}", headers=headers).json()

    assert toggled.json()["saved"] is True
    assert results["sources"][0]["saved"] is True
    assert state["saved_count"] == 1
