"""Wizard endpoints: resume upload, confirmation, search and results."""

import uuid

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from job_finder.agents.job_searcher import JobSearcher
from job_finder.agents.resume_analyzer import ResumeAnalyzer
from job_finder.api.deps import (
    get_client,
    get_preference_store,
    get_session_wizard,
    get_user_id,
    register_wizard,
)
from job_finder.api.limiter import limiter
from job_finder.api.schemas import (
    PreferencesSubmit,
    ProfileUpdate,
    SearchResultsResponse,
    SourceResponse,
    WizardStateResponse,
)
from job_finder.config import settings
from job_finder.store import PreferenceStore
from job_finder.utils.presenter import parse_search_text
from job_finder.wizard import WizardController

router = APIRouter()


def _state_response(session_id: str, wizard: WizardController) -> WizardStateResponse:
    return WizardStateResponse(
        session_id=session_id,
        step=wizard.step,
        resume_data=wizard.resume_data,
        location=wizard.location,
        interests=wizard.interests,
        error_message=wizard.error_message,
        has_results=wizard.search_result is not None,
        saved_count=len(wizard.saved_jobs),
    )


@router.post("", response_model=WizardStateResponse)
def create_wizard(
    user_id: str = Depends(get_user_id),
    client=Depends(get_client),
    store: PreferenceStore = Depends(get_preference_store),
):
    """Start a new wizard run."""
    wizard = WizardController(ResumeAnalyzer(client), JobSearcher(client), store)
    session_id = str(uuid.uuid4())
    register_wizard(session_id, user_id, wizard)
    return _state_response(session_id, wizard)


@router.get("/{session_id}", response_model=WizardStateResponse)
def get_state(session_id: str, wizard: WizardController = Depends(get_session_wizard)):
    """Get the current wizard state."""
    return _state_response(session_id, wizard)


@router.post("/{session_id}/resume", response_model=WizardStateResponse)
@limiter.limit(settings.upload_rate_limit)
async def upload_resume(
    request: Request,
    session_id: str,
    file: UploadFile = File(...),
    wizard: WizardController = Depends(get_session_wizard),
):
    """Upload a resume (PDF or image) and extract the profile."""
    content = await file.read()
    if len(content) > settings.max_upload_size:
        raise HTTPException(
            status_code=400,
            detail=f"File too large (max {settings.max_upload_size // (1024 * 1024)} MB)",
        )

    await wizard.upload_resume(content, file.content_type)
    return _state_response(session_id, wizard)


@router.put("/{session_id}/profile", response_model=WizardStateResponse)
def update_profile(
    session_id: str,
    data: ProfileUpdate,
    wizard: WizardController = Depends(get_session_wizard),
):
    """Edit extracted profile fields before searching."""
    for field, value in data.model_dump(exclude_none=True).items():
        wizard.edit_profile(field, value)
    return _state_response(session_id, wizard)


@router.post("/{session_id}/preferences", response_model=WizardStateResponse)
@limiter.limit(settings.search_rate_limit)
async def submit_preferences(
    request: Request,
    session_id: str,
    data: PreferencesSubmit,
    wizard: WizardController = Depends(get_session_wizard),
):
    """Confirm the profile and run the job search."""
    await wizard.submit_preferences(data.location, data.interests, data.profile)
    return _state_response(session_id, wizard)


@router.get("/{session_id}/results", response_model=SearchResultsResponse)
def get_results(session_id: str, wizard: WizardController = Depends(get_session_wizard)):
    """Get the search result with its parsed groups and saved flags."""
    result = wizard.search_result
    if result is None:
        raise HTTPException(status_code=404, detail="No search results for this session")

    return SearchResultsResponse(
        session_id=session_id,
        text=result.text,
        sources=[
            SourceResponse(uri=s.uri, title=s.title, saved=wizard.is_saved(s.uri))
            for s in result.sources
        ],
        blocks=parse_search_text(result.text),
    )


@router.post("/{session_id}/reset", response_model=WizardStateResponse)
def reset_wizard(session_id: str, wizard: WizardController = Depends(get_session_wizard)):
    """Discard the current run and go back to upload."""
    wizard.reset()
    return _state_response(session_id, wizard)


@router.post("/{session_id}/saved", response_model=WizardStateResponse)
def open_saved_jobs(session_id: str, wizard: WizardController = Depends(get_session_wizard)):
    """Switch to the saved jobs view."""
    wizard.open_saved_jobs()
    return _state_response(session_id, wizard)


@router.post("/{session_id}/saved/close", response_model=WizardStateResponse)
def close_saved_jobs(session_id: str, wizard: WizardController = Depends(get_session_wizard)):
    """Leave the saved jobs view."""
    wizard.close_saved_jobs()
    return _state_response(session_id, wizard)
