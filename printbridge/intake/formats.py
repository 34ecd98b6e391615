from enum import Enum
from pathlib import PurePath

from printbridge.intake.exceptions import UnsupportedFormatError


class DocumentFormat(str, Enum):
    PDF = "pdf"
    IMAGE = "image"
    OFFICE = "office"


PDF_EXTENSIONS = frozenset({".pdf"})
IMAGE_EXTENSIONS = frozenset(
    {".jpg", ".jpeg", ".png", ".tiff", ".tif", ".bmp", ".gif", ".webp"}
)
OFFICE_EXTENSIONS = frozenset(
    {
        ".docx", ".doc", ".odt", ".ott", ".rtf", ".txt",
        ".xlsx", ".xls", ".ods",
        ".pptx", ".ppt", ".odp",
    }
)
ALLOWED_EXTENSIONS = PDF_EXTENSIONS | IMAGE_EXTENSIONS | OFFICE_EXTENSIONS


def file_extension(filename: str) -> str:
    """Lowercased extension including the dot, or "" when there is none."""
    return PurePath(filename).suffix.lower()


def detect_format(filename: str) -> DocumentFormat:
    """Classify a file by its extension.

    Raises:
        UnsupportedFormatError: if the extension is not recognized.
    """
    ext = file_extension(filename)
    if ext in PDF_EXTENSIONS:
        return DocumentFormat.PDF
    if ext in IMAGE_EXTENSIONS:
        return DocumentFormat.IMAGE
    if ext in OFFICE_EXTENSIONS:
        return DocumentFormat.OFFICE
    raise UnsupportedFormatError(f"Unsupported file type: {ext or filename!r}")
