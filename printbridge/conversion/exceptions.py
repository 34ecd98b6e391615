class ConversionError(Exception):
    """Raised when a document cannot be turned into a PDF."""


class ConversionTimeoutError(ConversionError):
    """Raised when the external conversion tool does not finish in time."""
