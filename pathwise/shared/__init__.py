"""Shared utilities and common code."""

from pathwise.shared.config import Settings, get_settings
from pathwise.shared.exceptions import (
    ApiConnectionError,
    ApiError,
    AuthenticationError,
    ConfigurationError,
    IncompleteStepError,
    InvalidWeeklyHoursError,
    OnboardingNotFoundError,
    PathwiseException,
    PersistenceError,
    SubmissionError,
    ValidationError,
)
from pathwise.shared.logging_config import setup_logging
from pathwise.shared.models import BaseSchema, WireSchema

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "setup_logging",
    # Models
    "BaseSchema",
    "WireSchema",
    # Exceptions
    "PathwiseException",
    "ValidationError",
    "IncompleteStepError",
    "InvalidWeeklyHoursError",
    "AuthenticationError",
    "ApiError",
    "ApiConnectionError",
    "OnboardingNotFoundError",
    "PersistenceError",
    "SubmissionError",
    "ConfigurationError",
]
