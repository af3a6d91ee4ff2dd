"""
Defines custom exceptions for the application to allow for more specific error handling.
"""

from typing import Any


class EggheadCliError(Exception):
    """Base exception for all application-specific errors."""


class NotAuthenticated(EggheadCliError):
    """Raised when an operation needs a session that was never authenticated."""

    def __init__(self, message: str = "Not authenticated."):
        super().__init__(message)


class AuthenticationError(EggheadCliError):
    """Raised when the sign-in flow cannot produce a usable session."""


class CsrfTokenMissing(AuthenticationError):
    """Raised when the sign-in page carries no anti-forgery token."""

    def __init__(self):
        super().__init__(
            "Authentication failed: could not find the Cross-Site Request Forgery token."
        )


class AuthenticationRejected(AuthenticationError):
    """Raised when the submitted credentials do not yield a usable session."""


class FilterError(EggheadCliError):
    """Base class for catalog filter errors."""


class TechnologyNotFound(FilterError):
    """Raised when a technology filter matches nothing."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'No technology section found named "{name}".')


class CourseNotFound(FilterError):
    """Raised when a course filter matches nothing."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'No course found named "{name}".')


class FilterAmbiguous(FilterError):
    """Raised when both a technology and a course filter are supplied."""

    def __init__(self, technology: str, course: str):
        self.technology = technology
        self.course = course
        super().__init__(
            f'Filter by technology ("{technology}") or by course ("{course}"), not both.'
        )


class RetrievalError(EggheadCliError):
    """Raised when the catalog page or a course feed cannot be fetched."""

    def __init__(self, message: str, *, url: str | None = None):
        super().__init__(message)
        self.url = url


class TransferError(EggheadCliError):
    """
    Raised when a network operation fails while probing or downloading a lesson.

    Carries enough context for the caller to report which lesson failed and how
    far the transfer got.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        bytes_downloaded: int | None = None,
        task: Any = None,
    ):
        super().__init__(message)
        self.url = url
        self.bytes_downloaded = bytes_downloaded
        self.task = task


class ConfigurationError(EggheadCliError):
    """Raised for issues related to configuration loading or validation."""
