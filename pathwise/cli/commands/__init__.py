"""CLI Commands - Command group modules."""

from pathwise.cli.commands.auth import auth_app
from pathwise.cli.commands.onboard import onboard_app

__all__ = [
    "auth_app",
    "onboard_app",
]
