from __future__ import annotations


class AleTrailError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(AleTrailError):
    """A referenced trail, brewery or user does not exist."""

    status_code = 404


class InvalidInput(AleTrailError):
    """A required field is missing or a value is out of range."""

    status_code = 400


class UpstreamFailure(AleTrailError):
    """The data store itself failed."""

    status_code = 500


class DuplicateRecord(Exception):
    """Raised by a store when an insert violates a uniqueness constraint."""
