"""CLI Entry Point - Main command interface.

Sets up the command groups and the global options.
"""

import typer
from rich.console import Console
from rich.panel import Panel

from pathwise import __version__
from pathwise.cli.commands.auth import auth_app
from pathwise.cli.commands.onboard import onboard_app
from pathwise.shared.logging_config import setup_logging

# Main application
app = typer.Typer(
    name="pathwise",
    help="Pathwise - Set up your personalized learning path",
    no_args_is_help=True,
)
console = Console()

app.add_typer(auth_app, name="auth", help="Authentication commands")
app.add_typer(onboard_app, name="onboard", help="Learning path onboarding")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(Panel.fit(
        "[bold]Pathwise CLI[/bold]\n"
        f"Version: {__version__}",
        border_style="cyan",
    ))


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
) -> None:
    """Pathwise - Set up your personalized learning path.

    Quick start:
      pathwise auth login       - Save your access token
      pathwise onboard start    - Answer five questions to build your path
    """
    setup_logging(verbose=verbose)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
