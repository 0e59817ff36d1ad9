"""Error taxonomy shared by services and API handlers."""

from fastapi import status


class FolioGenError(Exception):
    """Base class for errors the API knows how to report."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    retryable: bool = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FolioGenError):
    """Missing or empty required input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConfigurationError(FolioGenError):
    """A required credential is not configured."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str = "AI service configuration error"):
        super().__init__(message)


class NotFoundError(FolioGenError):
    """A locally stored record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class UpstreamError(FolioGenError):
    """An external profile source answered with a non-success status."""

    def __init__(self, message: str, status_code: int = status.HTTP_502_BAD_GATEWAY):
        super().__init__(message)
        self.status_code = status_code


class GithubUserNotFoundError(UpstreamError):
    """GitHub reported that the requested user does not exist."""

    def __init__(self, username: str):
        super().__init__("GitHub user not found", status_code=status.HTTP_404_NOT_FOUND)
        self.username = username


class TransientServiceError(FolioGenError):
    """An AI call failed in a way that may succeed on retry."""

    retryable = True


class CallTimeoutError(TransientServiceError):
    """An AI call did not finish within its time budget."""

    def __init__(self, operation: str, timeout: float):
        super().__init__(f"{operation} timed out after {int(timeout * 1000)}ms")
        self.operation = operation
        self.timeout = timeout


class RetryExhaustedError(TransientServiceError):
    """Every attempt of a retried call failed."""

    retryable = False

    def __init__(self, operation: str, attempts: int, last_error: BaseException | None):
        super().__init__(f"{operation} failed after {attempts} attempts")
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error


class ContentIncompletenessError(FolioGenError):
    """The model answered, but without the fields the caller requires."""
