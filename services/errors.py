from typing import Optional


class MediVizeError(Exception):
    """Base error carrying the HTTP status and the user-facing message."""

    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error


class InvalidArgument(MediVizeError):
    status_code = 400


class UnsupportedMediaType(MediVizeError):
    # Bad uploads are reported as plain 400s
    status_code = 400


class NotFound(MediVizeError):
    status_code = 404


class Conflict(MediVizeError):
    status_code = 409


class UpstreamUnavailable(MediVizeError):
    status_code = 502


class StorageFailure(MediVizeError):
    status_code = 500


class Internal(MediVizeError):
    status_code = 500
