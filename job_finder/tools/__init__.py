"""
Tools for the Resume Job Finder.

- file_encoder: Validate and base64-encode resume uploads
"""

from job_finder.tools.file_encoder import (
    SUPPORTED_MEDIA_TYPES,
    encode_file,
    encode_file_from_path,
    guess_media_type,
    validate_media_type,
)

__all__ = [
    "SUPPORTED_MEDIA_TYPES",
    "encode_file",
    "encode_file_from_path",
    "guess_media_type",
    "validate_media_type",
]
