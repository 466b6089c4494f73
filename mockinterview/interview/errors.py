"""
Exception types raised by the interview orchestrator.
"""
from typing import Optional


class InterviewError(Exception):
    """Base class for all interview errors."""


class RemoteServiceError(InterviewError):
    """A remote question/analysis/report call failed or returned an error payload."""

    def __init__(self, message: str, service: str = "remote", status_code: Optional[int] = None):
        super().__init__(message)
        self.service = service
        self.status_code = status_code


class QuestionGenerationError(RemoteServiceError):
    """The next question could not be generated."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, service="question", status_code=status_code)


class ReportGenerationError(RemoteServiceError):
    """The final report could not be generated."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, service="report", status_code=status_code)


class CameraUnavailableError(InterviewError):
    """Camera is off, missing, or permission was denied."""


class InvalidTransitionError(InterviewError):
    """The requested operation can never apply in the current phase."""
