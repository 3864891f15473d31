"""Pathwise - Learning path onboarding client."""

__version__ = "0.1.0"
