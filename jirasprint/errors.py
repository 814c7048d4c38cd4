"""
Custom exception classes for the Jira sprint helper.

Every failure a command can hit is one of these. Nothing is retried or
recovered locally: errors propagate to the command-line entry point,
which prints a diagnostic and exits non-zero.
"""

from typing import Optional, Any, List


class JiraSprintError(Exception):
    """
    Base exception for all Jira sprint helper errors.

    Attributes:
        status_code: HTTP status code, when the error came from a response
        message: Human-readable error message
        original_error: The original exception that was caught
        details: Additional error details
    """

    def __init__(
        self,
        message: str = "Jira sprint helper error",
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
        details: Optional[Any] = None
    ):
        self.status_code = status_code
        self.message = message
        self.original_error = original_error
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the error."""
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message

    def to_dict(self) -> dict:
        """Convert error to dictionary for structured logging."""
        return {
            'error': self.__class__.__name__,
            'status_code': self.status_code,
            'message': self.message,
            'details': str(self.details) if self.details else None
        }


class ConfigError(JiraSprintError):
    """
    Raised when required configuration is missing.

    Raised before any network access is attempted.
    """

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(
            message=f"missing env: {', '.join(self.missing)}",
            details={'missing': self.missing}
        )


class TransportError(JiraSprintError):
    """Raised for connection-level failures (DNS, refused, TLS, reset)."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message=message, original_error=original_error)


class RemoteError(JiraSprintError):
    """
    Raised when Jira answers with a status outside [200, 300).

    Attributes:
        status_text: Reason phrase sent with the status code
    """

    def __init__(
        self,
        status_code: int,
        status_text: str = "",
        message: Optional[str] = None,
        details: Optional[Any] = None
    ):
        self.status_text = status_text
        if message is None:
            message = f"jira error: {status_code} {status_text}".rstrip()
        super().__init__(message=message, status_code=status_code, details=details)


class AuthenticationError(RemoteError):
    """
    Raised when Jira rejects the credentials (HTTP 401).

    This usually means the API token was revoked or the email does not
    match the account that owns the token.
    """

    def __init__(self, status_text: str = "Unauthorized", details: Optional[Any] = None):
        super().__init__(
            status_code=401,
            status_text=status_text,
            message="Authentication failed. Check JIRA_EMAIL and JIRA_API_TOKEN.",
            details=details
        )


class PermissionDeniedError(RemoteError):
    """Raised when the account may not perform the operation (HTTP 403)."""

    def __init__(self, status_text: str = "Forbidden", details: Optional[Any] = None):
        super().__init__(
            status_code=403,
            status_text=status_text,
            message="Permission denied. Your account cannot perform this operation.",
            details=details
        )


class NotFoundError(RemoteError):
    """Raised when the issue or sprint does not exist or is not visible (HTTP 404)."""

    def __init__(self, status_text: str = "Not Found", details: Optional[Any] = None):
        super().__init__(
            status_code=404,
            status_text=status_text,
            message="Not found. Please verify the issue key or sprint exists and you have access.",
            details=details
        )


class DecodeError(JiraSprintError):
    """Raised when a response body does not match the expected shape."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message=f"cannot decode response: {message}", original_error=original_error)


class NoSuchTransitionError(JiraSprintError):
    """
    Raised when no available transition leads to the requested status.

    The message lists every status the issue can currently move to.
    """

    def __init__(self, issue_key: str, target_status: str, available: List[str]):
        self.issue_key = issue_key
        self.target_status = target_status
        self.available = list(available)
        super().__init__(
            message=(
                f'no transition to "{target_status}" for issue {issue_key} '
                f"(available: {', '.join(self.available)})"
            ),
            details={'available': self.available}
        )


class NoActiveSprintError(JiraSprintError):
    """Raised when none of the assigned issues belongs to an active sprint."""

    def __init__(self):
        super().__init__(message="no active sprint found in current issues")


class UsageError(JiraSprintError):
    """Raised for malformed command-line input or an invalid interactive answer."""


class InputReadError(JiraSprintError):
    """Raised when standard input cannot be read while waiting for a choice."""

    def __init__(self, original_error: Optional[Exception] = None):
        reason = f": {original_error}" if original_error else ": end of input"
        super().__init__(message=f"read error{reason}", original_error=original_error)


def map_status_code_to_error(
    status_code: int,
    status_text: str = "",
    details: Optional[Any] = None
) -> RemoteError:
    """
    Map an HTTP status code to the matching RemoteError class.

    Args:
        status_code: HTTP status code from the Jira response
        status_text: Reason phrase from the response
        details: Response body excerpt, if any

    Returns:
        Appropriate RemoteError subclass instance
    """
    if status_code == 401:
        return AuthenticationError(status_text=status_text or "Unauthorized", details=details)
    elif status_code == 403:
        return PermissionDeniedError(status_text=status_text or "Forbidden", details=details)
    elif status_code == 404:
        return NotFoundError(status_text=status_text or "Not Found", details=details)
    else:
        return RemoteError(status_code=status_code, status_text=status_text, details=details)
