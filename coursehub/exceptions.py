"""Workflow exceptions.

Each exception carries the user-facing text shown in the error notice. They
are raised by the API client and the workflow, and caught by the workflow
operation that triggered them.
"""


class CourseHubError(Exception):
    """Base exception for the client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(CourseHubError):
    """Setup form is incomplete or holds a value outside its domain."""


class FetchError(CourseHubError):
    """A network, HTTP status or response parsing failure."""


class PreconditionError(CourseHubError):
    """An operation was invoked before the state it needs exists."""
