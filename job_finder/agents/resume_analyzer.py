"""
Resume Analyzer.

Sends the resume as an inline attachment and asks for the profile fields
plus an ATS audit, constrained by a response schema. The reply is validated
before it leaves this module: anything that does not fit the schema is an
AnalysisError.
"""

import base64
import binascii
import logging

from google.genai import types
from pydantic import ValidationError

from job_finder.config import settings
from job_finder.errors import AnalysisError
from job_finder.models import EncodedFile, ParsedResumeData
from job_finder.utils.parser import extract_json

logger = logging.getLogger(__name__)

EXTRACTION_INSTRUCTIONS = """
1. **Extraction**:
   - Current Job Title (job name)
   - Years of Experience (approximate number)
   - Key Skills (comma separated list)
   - Certifications (comma separated list, or "None" if none found)
"""

ATS_INSTRUCTIONS = """
2. **ATS Audit**:
   - **ATS Score**: Calculate a score from 0-100 based on keyword relevance, formatting clarity, quantifiable achievements, and overall impact. Be strict but fair.
   - **Recommendations**: Provide 3-4 specific, actionable, and short bullet points on how to improve the resume (e.g., "Use more action verbs", "Quantify sales results", "Add specific technical keywords").
"""

RESUME_ANALYZER_PROMPT = f"""Analyze the provided resume. Extract specific details for a job search and perform an ATS (Applicant Tracking System) audit.
{EXTRACTION_INSTRUCTIONS}{ATS_INSTRUCTIONS}
Return the result in JSON format.
"""

# Legacy contract: profile extraction only, no ATS audit
RESUME_EXTRACTOR_PROMPT = f"""Analyze the provided resume. Extract specific details for a job search.
{EXTRACTION_INSTRUCTIONS}
Return the result in JSON format.
"""

PROFILE_FIELDS = ["jobName", "experienceYears", "skills", "certifications"]
ATS_FIELDS = ["atsScore", "atsRecommendations"]


def build_response_schema(ats_audit: bool = True) -> types.Schema:
    """Response schema for the analysis call. Every declared field is required."""
    properties = {name: types.Schema(type=types.Type.STRING) for name in PROFILE_FIELDS}
    required = list(PROFILE_FIELDS)
    if ats_audit:
        properties["atsScore"] = types.Schema(type=types.Type.NUMBER)
        properties["atsRecommendations"] = types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
        )
        required += ATS_FIELDS
    return types.Schema(type=types.Type.OBJECT, properties=properties, required=required)


class ResumeAnalyzer:
    """Extracts a ParsedResumeData from a resume file with one model call."""

    def __init__(self, client, model: str | None = None, ats_audit: bool | None = None):
        self.client = client
        self.model = model or settings.gemini_model
        self.ats_audit = settings.ats_audit if ats_audit is None else ats_audit

    @property
    def prompt(self) -> str:
        return RESUME_ANALYZER_PROMPT if self.ats_audit else RESUME_EXTRACTOR_PROMPT

    def build_contents(self, encoded: EncodedFile) -> list:
        try:
            data = base64.b64decode(encoded.data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise AnalysisError("Attachment is not valid base64") from e
        return [
            types.Part.from_bytes(data=data, mime_type=encoded.media_type),
            types.Part.from_text(text=self.prompt),
        ]

    async def analyze(self, encoded: EncodedFile) -> ParsedResumeData:
        """
        Analyze a resume.

        Args:
            encoded: The resume file, base64 encoded, with its media type

        Returns:
            Fully populated ParsedResumeData

        Raises:
            AnalysisError: On transport failure, empty body or schema mismatch
        """
        contents = self.build_contents(encoded)
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=build_response_schema(self.ats_audit),
                ),
            )
            text = response.text
        except Exception as e:
            logger.error(f"Error analyzing resume: {e}")
            raise AnalysisError(f"Resume analysis request failed: {e}") from e

        return self.parse_response(text)

    def parse_response(self, text: str | None) -> ParsedResumeData:
        """Validate the model reply against the expected profile shape."""
        if not text or not text.strip():
            raise AnalysisError("Empty response from AI")

        payload = extract_json(text, expect_array=False)
        if payload is None:
            logger.error(f"Resume analysis returned non-JSON output: {text[:200]}")
            raise AnalysisError("Response is not a JSON object")

        required = PROFILE_FIELDS + ATS_FIELDS if self.ats_audit else PROFILE_FIELDS
        missing = [name for name in required if payload.get(name) is None]
        if missing:
            raise AnalysisError(f"Response is missing fields: {', '.join(missing)}")

        try:
            data = ParsedResumeData.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Resume analysis response failed validation: {e}")
            raise AnalysisError("Response does not match the profile schema") from e

        logger.info(f"Extracted profile for '{data.job_name}' (ATS score: {data.ats_score})")
        return data
