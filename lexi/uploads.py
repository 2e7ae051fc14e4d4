# lexi/uploads.py
# Pre-flight checks on uploaded documents and audio clips

from dataclasses import dataclass
from typing import Optional

import fitz  # PyMuPDF

from lexi import config
from lexi.exceptions import FileTooLargeError, UnsupportedFileTypeError

ACCEPTED_DOCUMENT_TYPES = "image/*,application/pdf"
PDF_MIME_TYPE = "application/pdf"

_EXTENSION_MIME_TYPES = {
    ".pdf": PDF_MIME_TYPE,
    ".jpg": "image/jpeg", ".jpeg": "image/jpeg",
    ".png": "image/png", ".webp": "image/webp",
    ".gif": "image/gif", ".bmp": "image/bmp",
    ".tif": "image/tiff", ".tiff": "image/tiff",
    ".heic": "image/heic",
}


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    mime_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def size_mb(self) -> float:
        return self.size / 1024 / 1024

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == PDF_MIME_TYPE


def guess_mime_type(filename: str, declared: Optional[str] = None) -> str:
    """Prefer the browser-declared type; fall back to the file extension."""
    if declared and declared != "application/octet-stream":
        return declared.split(";")[0].strip().lower()
    lower = (filename or "").lower()
    for ext, mime in _EXTENSION_MIME_TYPES.items():
        if lower.endswith(ext):
            return mime
    return "application/octet-stream"


def validate_document(upload: UploadedFile) -> UploadedFile:
    """Reject documents that must never reach the analysis model."""
    if upload.size > config.MAX_FILE_SIZE_BYTES:
        raise FileTooLargeError(
            f"File is too large ({upload.size_mb:.2f}MB). "
            f"Please upload a file smaller than {config.MAX_FILE_SIZE_MB}MB.",
            details={"size": upload.size, "limit": config.MAX_FILE_SIZE_BYTES},
        )
    if upload.size == 0:
        raise UnsupportedFileTypeError("The selected file is empty.")
    if not (upload.mime_type.startswith("image/") or upload.is_pdf):
        raise UnsupportedFileTypeError(
            "Unsupported file type. Please upload an image or a PDF.",
            details={"mime_type": upload.mime_type},
        )
    if upload.is_pdf:
        _check_pdf_readable(upload)
    return upload


def _check_pdf_readable(upload: UploadedFile):
    try:
        with fitz.open(stream=upload.data, filetype="pdf") as doc:
            page_count = doc.page_count
    except (RuntimeError, ValueError) as e:
        raise UnsupportedFileTypeError(
            "This PDF could not be opened. It may be corrupted.",
            details={"filename": upload.filename, "error": str(e)},
        ) from e
    if page_count < 1:
        raise UnsupportedFileTypeError("This PDF has no pages.", details={"filename": upload.filename})


def validate_audio(upload: UploadedFile) -> UploadedFile:
    if upload.size > config.MAX_FILE_SIZE_BYTES:
        raise FileTooLargeError(
            "Audio recording is too long. Please record shorter segments (under 2 minutes).",
            details={"size": upload.size, "limit": config.MAX_FILE_SIZE_BYTES},
        )
    if upload.size == 0:
        raise UnsupportedFileTypeError("The recording is empty.")
    return upload
