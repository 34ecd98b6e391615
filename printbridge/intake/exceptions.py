class UploadError(Exception):
    """Base exception for uploads rejected before any processing."""


class UnsupportedFormatError(UploadError):
    """Raised when a file extension is not one the normalizer understands."""
