"""
Configuration management for Resume Job Finder.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # LLM
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    request_timeout_ms: int | None = None  # None = wait for the model indefinitely

    # Prompt contracts ("grouped" + ATS audit is canonical, the rest is legacy)
    ats_audit: bool = True
    search_layout: str = "grouped"  # grouped/flat

    # Database
    database_url: str = "sqlite:///./job_finder.db"

    # Preferences
    default_theme: str = "dark"  # used when no theme is stored

    # API
    cors_origins: str = "http://localhost:5173"
    max_upload_size: int = 5 * 1024 * 1024  # 5 MB
    rate_limit_enabled: bool = True
    upload_rate_limit: str = "5/minute"
    search_rate_limit: str = "3/minute"
    session_ttl_seconds: int = 3600
    max_sessions: int = 200

    # Observability
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


settings = Settings()
