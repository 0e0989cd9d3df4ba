"""
Wizard controller.

Drives one run of the job finder:

    UPLOAD -> ANALYZING -> CONFIRM_DETAILS -> SEARCHING -> RESULTS

SAVED_JOBS can be opened from UPLOAD, CONFIRM_DETAILS and RESULTS and returns
to where it was opened. A failed remote call lands in ERROR, which only
leaves through reset(). The step flips to ANALYZING/SEARCHING before the
remote call is awaited, so a second call made while one is in flight is
rejected as an invalid transition.
"""

import logging

from pydantic import BaseModel

from job_finder.agents.job_searcher import DEFAULT_INTERESTS, JobSearcher
from job_finder.agents.resume_analyzer import ResumeAnalyzer
from job_finder.errors import (
    ANALYSIS_FAILED_MESSAGE,
    SEARCH_FAILED_MESSAGE,
    EmptyLocationError,
    InvalidTransitionError,
)
from job_finder.models import (
    EDITABLE_PROFILE_FIELDS,
    AppStep,
    GroundingSource,
    ParsedResumeData,
    SearchResult,
)
from job_finder.store.preference_store import PreferenceStore
from job_finder.tools.file_encoder import encode_file, validate_media_type

logger = logging.getLogger(__name__)

SAVED_JOBS_ENTRY_STEPS = (AppStep.UPLOAD, AppStep.CONFIRM_DETAILS, AppStep.RESULTS)
RESETTABLE_STEPS = (AppStep.UPLOAD, AppStep.CONFIRM_DETAILS, AppStep.RESULTS, AppStep.ERROR)


class WizardState(BaseModel):
    """Point-in-time view of a wizard."""

    step: AppStep
    resume_data: ParsedResumeData | None = None
    search_result: SearchResult | None = None
    location: str = ""
    interests: str = ""
    error_message: str | None = None
    saved_jobs: list[GroundingSource] = []


class WizardController:
    """Linear state machine over the analyzer, the searcher and the preference store."""

    def __init__(self, analyzer: ResumeAnalyzer, searcher: JobSearcher, store: PreferenceStore):
        self.analyzer = analyzer
        self.searcher = searcher
        self.store = store

        self.step = AppStep.UPLOAD
        self.resume_data: ParsedResumeData | None = None
        self.search_result: SearchResult | None = None
        self.location = ""
        self.interests = ""
        self.error_message: str | None = None
        self._return_step: AppStep | None = None

    def _require(self, operation: str, *allowed: AppStep) -> None:
        if self.step not in allowed:
            raise InvalidTransitionError(operation, self.step)

    async def upload_resume(self, content: bytes, media_type: str | None) -> AppStep:
        """
        Analyze an uploaded resume.

        An unsupported media type raises UnsupportedFileTypeError and leaves
        the wizard in UPLOAD. Any failure after validation moves it to ERROR.
        """
        self._require("upload a resume", AppStep.UPLOAD)
        validate_media_type(media_type)

        self.step = AppStep.ANALYZING
        self.error_message = None
        try:
            encoded = encode_file(content, media_type)
            data = await self.analyzer.analyze(encoded)
        except Exception as e:
            logger.error(f"Resume analysis failed: {e}")
            self.error_message = ANALYSIS_FAILED_MESSAGE
            self.step = AppStep.ERROR
            return self.step

        self.resume_data = data
        self.step = AppStep.CONFIRM_DETAILS
        return self.step

    def edit_profile(self, field: str, value: str) -> ParsedResumeData:
        """Change one extracted profile field before searching."""
        self._require("edit the profile", AppStep.CONFIRM_DETAILS)
        if field not in EDITABLE_PROFILE_FIELDS:
            raise ValueError(f"Unknown profile field: {field}")
        self.resume_data = self.resume_data.model_copy(update={field: value})
        return self.resume_data

    async def submit_preferences(
        self,
        location: str,
        interests: str = "",
        updated_data: ParsedResumeData | None = None,
    ) -> AppStep:
        """
        Run the job search for the confirmed profile.

        An empty location raises EmptyLocationError before any remote call.
        A failed search moves the wizard to ERROR.
        """
        self._require("submit preferences", AppStep.CONFIRM_DETAILS)
        if not location or not location.strip():
            raise EmptyLocationError()

        self.location = location.strip()
        self.interests = (interests or "").strip() or DEFAULT_INTERESTS
        if updated_data is not None:
            self.resume_data = updated_data

        self.step = AppStep.SEARCHING
        try:
            result = await self.searcher.search(self.resume_data, self.location, self.interests)
        except Exception as e:
            logger.error(f"Job search failed: {e}")
            self.error_message = SEARCH_FAILED_MESSAGE
            self.step = AppStep.ERROR
            return self.step

        self.search_result = result
        self.step = AppStep.RESULTS
        return self.step

    def reset(self) -> AppStep:
        """Start over. Saved jobs and the theme are kept."""
        self._require("reset", *RESETTABLE_STEPS)
        self.step = AppStep.UPLOAD
        self.resume_data = None
        self.search_result = None
        self.location = ""
        self.interests = ""
        self.error_message = None
        self._return_step = None
        return self.step

    def open_saved_jobs(self) -> AppStep:
        self._require("open saved jobs", *SAVED_JOBS_ENTRY_STEPS)
        self._return_step = self.step
        self.step = AppStep.SAVED_JOBS
        return self.step

    def close_saved_jobs(self) -> AppStep:
        self._require("close saved jobs", AppStep.SAVED_JOBS)
        self.step = self._return_step or AppStep.UPLOAD
        self._return_step = None
        return self.step

    # Saved jobs are available from every step; they live outside the run.

    @property
    def saved_jobs(self) -> list[GroundingSource]:
        return self.store.saved_jobs

    def toggle_save(self, source: GroundingSource) -> bool:
        return self.store.toggle_save(source)

    def is_saved(self, uri: str) -> bool:
        return self.store.is_saved(uri)

    def snapshot(self) -> WizardState:
        return WizardState(
            step=self.step,
            resume_data=self.resume_data,
            search_result=self.search_result,
            location=self.location,
            interests=self.interests,
            error_message=self.error_message,
            saved_jobs=self.saved_jobs,
        )
