"""Authentication Commands - Store, check and clear the bearer token."""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Prompt

from pathwise.cli.runner import run_async
from pathwise.cli.state import get_state_manager
from pathwise.modules.onboarding.client import create_onboarding_client
from pathwise.modules.onboarding.interface import AuthContext
from pathwise.shared.config import get_settings
from pathwise.shared.exceptions import (
    ApiConnectionError,
    AuthenticationError,
    OnboardingNotFoundError,
    PathwiseException,
)

auth_app = typer.Typer(help="Authentication commands")
console = Console()


async def _verify_token(token: str) -> None:
    """Make one authenticated call to check the backend accepts the token.

    Raises:
        AuthenticationError: If the token is rejected
    """
    client = create_onboarding_client(AuthContext(access_token=token))
    try:
        await client.get_status()
    except OnboardingNotFoundError:
        # Authenticated, just not onboarded yet
        return


@auth_app.command("login")
def login(
    token: str = typer.Option(
        None,
        "--token",
        "-t",
        help="Bearer token issued by the Pathwise web app",
    ),
    verify: bool = typer.Option(
        True,
        "--verify/--no-verify",
        help="Check the token against the backend before saving it",
    ),
) -> None:
    """Save the access token used for all requests."""
    console.print(Panel.fit(
        "[bold cyan]Login[/bold cyan]",
        border_style="cyan",
    ))

    if not token:
        token = Prompt.ask("Access token", password=True)
    token = token.strip()
    if not token:
        console.print("[red]Error:[/red] Token cannot be empty")
        raise typer.Exit(1)

    if verify:
        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                progress.add_task(description="Verifying token...", total=None)
                run_async(_verify_token(token))
        except AuthenticationError as e:
            console.print(f"[red]Login failed:[/red] {e.message}")
            raise typer.Exit(1)
        except ApiConnectionError:
            console.print(
                "[yellow]Could not reach the server to verify the token. "
                "Saving it anyway.[/yellow]"
            )
        except PathwiseException as e:
            console.print(f"[red]Error:[/red] {e.message}")
            raise typer.Exit(1)

    get_state_manager().update_token(token)
    console.print("[green]Logged in.[/green]")
    console.print("[dim]Run 'pathwise onboard start' to set up your learning path.[/dim]")


@auth_app.command("logout")
def logout() -> None:
    """Forget the stored access token."""
    get_state_manager().clear()
    console.print("[green]Logged out.[/green]")


@auth_app.command("status")
def status() -> None:
    """Show where the current credential comes from."""
    if get_settings().api_token:
        console.print("Authenticated via [cyan]PATHWISE_API_TOKEN[/cyan]")
        return

    state = get_state_manager().load()
    if not state.is_authenticated:
        console.print("[yellow]Not logged in.[/yellow] Run 'pathwise auth login'.")
        raise typer.Exit(1)

    saved = state.saved_at.strftime("%Y-%m-%d %H:%M") if state.saved_at else "unknown"
    console.print(f"Logged in [dim](token saved {saved})[/dim]")
