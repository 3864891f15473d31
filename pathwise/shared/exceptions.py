"""Shared exceptions for the onboarding client.

This module defines a consistent exception hierarchy used across all modules
to standardize error handling and provide clear error semantics.
"""

from typing import Any


class PathwiseException(Exception):
    """Base exception for all application errors.

    All domain-specific exceptions should inherit from this class
    so the controller and the CLI can convert them to display messages
    in one place.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# ===================
# Validation Errors
# ===================

class ValidationError(PathwiseException):
    """Raised when input validation fails."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message, {"field": field})
        self.field = field


class IncompleteStepError(ValidationError):
    """Raised when a wizard step does not satisfy its completeness rules."""

    def __init__(self, step: int, message: str) -> None:
        super().__init__(f"step{step}", message)
        self.details["step"] = step
        self.step = step


class InvalidWeeklyHoursError(ValidationError):
    """Raised when weekly hours fall outside the selectable range."""

    def __init__(self, hours: int, minimum: int, maximum: int) -> None:
        super().__init__(
            "weekly_hours",
            f"Weekly hours must be between {minimum} and {maximum}, got {hours}",
        )
        self.details["weekly_hours"] = hours


# ===================
# Authentication Errors
# ===================

class AuthenticationError(PathwiseException):
    """Raised when no usable bearer credential is available."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


# ===================
# Integration Errors
# ===================

class ApiError(PathwiseException):
    """Raised when the roadmap backend answers with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message, {"status_code": status_code})
        self.status_code = status_code


class OnboardingNotFoundError(ApiError):
    """Raised when the user has no onboarding session yet."""

    def __init__(self) -> None:
        super().__init__("No onboarding session found", status_code=404)


class ApiConnectionError(ApiError):
    """Raised when the backend cannot be reached."""

    def __init__(self, reason: str) -> None:
        super().__init__("Unable to connect to server. Please try again.")
        self.details["reason"] = reason


class PersistenceError(ApiError):
    """Raised when saving step data fails."""

    def __init__(self, step: int, message: str, status_code: int | None = None) -> None:
        super().__init__(message, status_code=status_code)
        self.details["step"] = step
        self.step = step


class SubmissionError(ApiError):
    """Raised when roadmap generation or a preferences update fails."""
    pass


# ===================
# Configuration Errors
# ===================

class ConfigurationError(PathwiseException):
    """Raised when there's a configuration problem."""
    pass
