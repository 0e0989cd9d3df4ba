"""API request/response schemas."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from job_finder.models import AppStep, ParsedResumeData, Theme
from job_finder.utils.presenter import Block


# Wizard schemas
class WizardStateResponse(BaseModel):
    session_id: str
    step: AppStep
    resume_data: ParsedResumeData | None
    location: str
    interests: str
    error_message: str | None
    has_results: bool
    saved_count: int


class ProfileUpdate(BaseModel):
    job_name: str | None = None
    experience_years: str | None = None
    skills: str | None = None
    certifications: str | None = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class PreferencesSubmit(BaseModel):
    location: str = ""
    interests: str = ""
    profile: ParsedResumeData | None = None


# Results schemas
class SourceResponse(BaseModel):
    uri: str
    title: str
    saved: bool


class SearchResultsResponse(BaseModel):
    session_id: str
    text: str
    sources: list[SourceResponse]
    blocks: list[Block]


# Bookmark schemas
class BookmarkToggle(BaseModel):
    uri: str
    title: str = ""


class BookmarkResponse(BaseModel):
    uri: str
    title: str

    class Config:
        from_attributes = True


class BookmarkListResponse(BaseModel):
    bookmarks: list[BookmarkResponse]


class BookmarkToggleResponse(BaseModel):
    uri: str
    saved: bool
    bookmarks: list[BookmarkResponse]


# Preferences schemas
class ThemeUpdate(BaseModel):
    theme: Theme


class ThemeResponse(BaseModel):
    theme: Theme
