"""CLI Module - Command-line interface for Pathwise onboarding.

Usage:
    pathwise --help              Show all commands
    pathwise auth login          Save your access token
    pathwise onboard start       Start or resume the onboarding wizard
    pathwise onboard preferences Change your answers and regenerate the path
    pathwise onboard estimate    Estimate completion time offline
"""

from pathwise.cli.main import app, main

__all__ = ["app", "main"]
