"""Unit tests for upload pre-flight checks."""

import pytest

from lexi import config
from lexi.exceptions import FileTooLargeError, UnsupportedFileTypeError
from lexi.uploads import UploadedFile, guess_mime_type, validate_audio, validate_document

OVER_LIMIT = config.MAX_FILE_SIZE_BYTES + 1


class TestGuessMimeType:
    def test_declared_type_wins(self):
        assert guess_mime_type("scan.bin", "image/jpeg") == "image/jpeg"

    def test_declared_parameters_are_dropped(self):
        assert guess_mime_type("clip", "audio/webm;codecs=opus") == "audio/webm"

    def test_extension_fallback(self):
        assert guess_mime_type("Lease.PDF", None) == "application/pdf"
        assert guess_mime_type("photo.jpeg", "application/octet-stream") == "image/jpeg"

    def test_unknown(self):
        assert guess_mime_type("notes", None) == "application/octet-stream"


class TestValidateDocument:
    def test_accepts_image(self, png_bytes):
        upload = UploadedFile("scan.png", "image/png", png_bytes)
        assert validate_document(upload) is upload

    def test_accepts_pdf(self, pdf_bytes):
        upload = UploadedFile("lease.pdf", "application/pdf", pdf_bytes)
        assert validate_document(upload) is upload

    def test_rejects_oversized_file(self):
        upload = UploadedFile("huge.png", "image/png", b"\x00" * OVER_LIMIT)
        with pytest.raises(FileTooLargeError) as exc_info:
            validate_document(upload)
        assert "Please upload a file smaller than 4MB." in exc_info.value.message
        assert exc_info.value.message.startswith("File is too large (4.00MB)")

    def test_exactly_at_limit_is_allowed(self):
        upload = UploadedFile("edge.png", "image/png", b"\x00" * config.MAX_FILE_SIZE_BYTES)
        validate_document(upload)

    def test_rejects_other_types(self):
        upload = UploadedFile("notes.txt", "text/plain", b"hello")
        with pytest.raises(UnsupportedFileTypeError):
            validate_document(upload)

    def test_rejects_empty_file(self):
        with pytest.raises(UnsupportedFileTypeError):
            validate_document(UploadedFile("empty.png", "image/png", b""))

    def test_rejects_corrupt_pdf(self):
        upload = UploadedFile("broken.pdf", "application/pdf", b"this is not a pdf at all")
        with pytest.raises(UnsupportedFileTypeError):
            validate_document(upload)


class TestValidateAudio:
    def test_accepts_clip(self):
        clip = UploadedFile("recording.webm", "audio/webm", b"\x1aE\xdf\xa3" * 10)
        assert validate_audio(clip) is clip

    def test_rejects_long_recording(self):
        clip = UploadedFile("recording.webm", "audio/webm", b"\x00" * OVER_LIMIT)
        with pytest.raises(FileTooLargeError) as exc_info:
            validate_audio(clip)
        assert "Audio recording is too long" in exc_info.value.message
