"""
Gemini client factory.

One client is shared by the analyzer and the searcher.
"""

from google import genai
from google.genai import types

from job_finder.config import settings


def create_client(api_key: str | None = None, timeout_ms: int | None = None) -> genai.Client:
    """Create the Gemini client. The timeout is optional; without it calls may hang."""
    api_key = api_key or settings.gemini_api_key
    if not api_key:
        raise ValueError("GEMINI_API_KEY not set")

    timeout_ms = timeout_ms if timeout_ms is not None else settings.request_timeout_ms
    http_options = types.HttpOptions(timeout=timeout_ms) if timeout_ms else None
    return genai.Client(api_key=api_key, http_options=http_options)
