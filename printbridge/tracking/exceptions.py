class TrackingError(Exception):
    """Base exception for job correlation errors."""


class CorrelationMiss(TrackingError):
    """Raised when a spool job cannot be tied to any registration. Non-fatal."""


class DuplicateRegistrationError(TrackingError):
    """Raised when a filename is registered while already being tracked."""


class InvalidTransitionError(TrackingError):
    """Raised when a job registration is moved along an edge that does not exist."""
