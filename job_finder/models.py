"""Domain models shared by the clients, the wizard and the API."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class AppStep(str, Enum):
    """Wizard steps. Exactly one is active at a time."""

    UPLOAD = "UPLOAD"
    ANALYZING = "ANALYZING"
    CONFIRM_DETAILS = "CONFIRM_DETAILS"
    SEARCHING = "SEARCHING"
    RESULTS = "RESULTS"
    SAVED_JOBS = "SAVED_JOBS"
    ERROR = "ERROR"


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"


class ParsedResumeData(BaseModel):
    """Profile extracted from a resume, editable before the search."""

    job_name: str
    experience_years: str
    skills: str  # comma separated
    certifications: str  # comma separated or "None"
    ats_score: int | float | None = None  # 0-100, whole numbers stay int
    ats_recommendations: list[str] | None = None

    @field_validator("ats_score")
    @classmethod
    def check_ats_score(cls, v):
        if v is not None and not 0 <= v <= 100:
            raise ValueError("ATS score must be between 0 and 100")
        return v

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# Fields a user may edit in the confirm step
EDITABLE_PROFILE_FIELDS = ("job_name", "experience_years", "skills", "certifications")


class GroundingSource(BaseModel):
    """A web citation the search answer was grounded on."""

    uri: str
    title: str = ""


class SearchResult(BaseModel):
    text: str
    sources: list[GroundingSource] = Field(default_factory=list)

    class Config:
        frozen = True


class EncodedFile(BaseModel):
    """File bytes as base64 text plus the declared media type."""

    data: str
    media_type: str
