"""
Application Exceptions

Messages are shown to the user as-is.
"""


class NephranetError(Exception):
    """Base exception for user-facing failures."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class StoreError(NephranetError):
    """Raised when the reading store cannot be read or written."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class GeocodingError(NephranetError):
    """Raised when a location name cannot be turned into coordinates."""


class SubmissionError(NephranetError):
    """Raised when an uploaded reading fails validation."""
