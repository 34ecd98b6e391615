class SpoolQueryError(Exception):
    """Raised when one read of the OS print queue fails."""
