"""
File encoding tool for resume uploads.

Turns an uploaded PDF or image into base64 text that can be sent inline
to the model.
"""

import base64
import mimetypes
from pathlib import Path

from job_finder.errors import FileEncodingError, UnsupportedFileTypeError
from job_finder.models import EncodedFile

mimetypes.add_type("image/webp", ".webp")

SUPPORTED_MEDIA_TYPES = frozenset({
    "application/pdf",
    "image/png",
    "image/jpeg",
    "image/webp",
})


def validate_media_type(media_type: str | None) -> str:
    """
    Check a declared media type against the supported resume formats.

    Args:
        media_type: Content type as declared by the upload (may carry parameters)

    Returns:
        The normalized media type (lowercase, no parameters)

    Raises:
        UnsupportedFileTypeError: If the type is missing or not supported
    """
    normalized = (media_type or "").split(";")[0].strip().lower()
    if normalized == "image/jpg":
        normalized = "image/jpeg"
    if normalized not in SUPPORTED_MEDIA_TYPES:
        raise UnsupportedFileTypeError()
    return normalized


def encode_file(content: bytes, media_type: str | None) -> EncodedFile:
    """
    Encode file bytes for an inline model attachment.

    Args:
        content: Raw bytes of the uploaded file
        media_type: Declared content type of the file

    Returns:
        EncodedFile with base64 data and the normalized media type
    """
    normalized = validate_media_type(media_type)
    try:
        data = base64.b64encode(content).decode("ascii")
    except (TypeError, ValueError) as e:
        raise FileEncodingError(f"Could not encode file: {e}") from e
    return EncodedFile(data=data, media_type=normalized)


def guess_media_type(file_path: str | Path) -> str:
    """Supported media type for a file name, from its extension. Nothing is read."""
    media_type, _ = mimetypes.guess_type(Path(file_path).name)
    return validate_media_type(media_type)


def encode_file_from_path(file_path: str | Path) -> EncodedFile:
    """
    Encode a file from disk, guessing its media type from the extension.

    Args:
        file_path: Path to a PDF or image file

    Returns:
        EncodedFile ready to be sent to the analyzer
    """
    path = Path(file_path)
    media_type = guess_media_type(path)
    try:
        content = path.read_bytes()
    except OSError as e:
        raise FileEncodingError(f"Could not read {path}: {e}") from e
    return encode_file(content, media_type)
