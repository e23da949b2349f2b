"""Custom exception classes for the Progress Tracker API.

This module defines application-specific exceptions following Google Python
Style Guide.
"""


class ProgressTrackerError(Exception):
    """Base exception for all Progress Tracker errors."""

    pass


class UserAlreadyExistsError(ProgressTrackerError):
    """Raised when trying to create a user whose username is taken."""

    def __init__(self, username: str):
        """Initialize the exception.

        Args:
            username: The username that is already taken.
        """
        self.username = username
        super().__init__(f'Username "{username}" is already taken.')


class UserNotFoundError(ProgressTrackerError):
    """Raised when a login names a username that does not exist."""

    def __init__(self, username: str):
        self.username = username
        super().__init__("Username not found. Check spelling or sign up.")


class InvalidPasswordError(ProgressTrackerError):
    """Raised when the supplied password hash does not match the stored one."""

    def __init__(self, username: str):
        self.username = username
        super().__init__("Incorrect password.")


class ConfigurationError(ProgressTrackerError):
    """Raised when there is a configuration error."""

    pass


class LLMError(ProgressTrackerError):
    """Raised when there is an error communicating with the LLM."""

    pass


class UpstreamServiceError(LLMError):
    """Raised when the judgment service answers with a non-success status."""

    def __init__(self, status_code: int, message: str):
        """Initialize the exception.

        Args:
            status_code: HTTP status returned by the judgment service.
            message: Error text returned by the judgment service.
        """
        self.status_code = status_code
        super().__init__(f"Judgment service returned {status_code}: {message}")


class GradingError(LLMError):
    """Raised when the grading call fails before any response is received."""

    pass
