import base64

import pytest

from job_finder.errors import UNSUPPORTED_FILE_MESSAGE, FileEncodingError, UnsupportedFileTypeError
from job_finder.tools.file_encoder import encode_file, encode_file_from_path, guess_media_type, validate_media_type


@pytest.mark.parametrize("media_type", ["application/pdf", "image/png", "image/jpeg", "image/webp"])
def test_supported_types_are_accepted(media_type):
    assert validate_media_type(media_type) == media_type


def test_media_type_is_normalized():
    assert validate_media_type("Application/PDF; charset=binary") == "application/pdf"
    assert validate_media_type("image/jpg") == "image/jpeg"


@pytest.mark.parametrize("media_type", ["text/plain", "application/msword", "", None])
def test_unsupported_types_are_rejected(media_type):
    with pytest.raises(UnsupportedFileTypeError) as exc:
        validate_media_type(media_type)
    assert exc.value.message == UNSUPPORTED_FILE_MESSAGE


def test_encode_file_base64():
    encoded = encode_file(b"%PDF-1.7 resume", "application/pdf")

    assert encoded.media_type == "application/pdf"
    assert base64.b64decode(encoded.data) == b"%PDF-1.7 resume"


def test_encode_file_rejects_non_bytes():
    with pytest.raises(FileEncodingError):
        encode_file("not bytes", "application/pdf")


def test_encode_file_from_path_guesses_type(tmp_path):
    path = tmp_path / "resume.png"
    path.write_bytes(b"\x89PNG fake")

    encoded = encode_file_from_path(path)

    assert encoded.media_type == "image/png"
    assert base64.b64decode(encoded.data) == b"\x89PNG fake"


def test_encode_file_from_path_rejects_docx(tmp_path):
    path = tmp_path / "resume.docx"
    path.write_bytes(b"PK")

    with pytest.raises(UnsupportedFileTypeError):
        encode_file_from_path(path)


def test_encode_file_from_path_missing_file(tmp_path):
    with pytest.raises(FileEncodingError):
        encode_file_from_path(tmp_path / "missing.pdf")


@pytest.mark.parametrize(
    ("name", "expected"),
    [("resume.pdf", "application/pdf"), ("scan.JPG", "image/jpeg"), ("photo.webp", "image/webp")],
)
def test_guess_media_type_reads_nothing(tmp_path, name, expected):
    assert guess_media_type(tmp_path / name) == expected


def test_guess_media_type_rejects_unknown_extension():
    with pytest.raises(UnsupportedFileTypeError):
        guess_media_type("resume.docx")
