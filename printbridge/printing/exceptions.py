class SubmissionError(Exception):
    """Raised when the OS print service rejects or fails a submission."""


class InvalidPrintOptionError(SubmissionError):
    """Raised when a print option value is not understood."""
