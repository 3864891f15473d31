"""Onboarding Commands - Run the wizard, inspect progress, edit preferences."""

from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from pathwise.cli.runner import run_async
from pathwise.cli.state import require_auth
from pathwise.cli.ui.display import display_error, display_status
from pathwise.cli.ui.prompts import RichPrompter
from pathwise.cli.wizard import WizardResult, run_wizard
from pathwise.modules.onboarding.catalog import (
    TARGET_ROLE_METADATA,
    TARGET_ROLE_NAMES,
    TargetRole,
    get_prerequisite_skill_by_slug,
)
from pathwise.modules.onboarding.client import create_onboarding_client
from pathwise.modules.onboarding.controller import WizardController
from pathwise.modules.onboarding.interface import OnboardingStep, SubmissionMode
from pathwise.modules.onboarding.schemas import (
    CompletionResult,
    OnboardingStatus,
)
from pathwise.modules.onboarding.summary import (
    calculate_adjusted_total_hours,
    calculate_completion_weeks,
    format_duration,
    is_in_recommended_range,
)
from pathwise.modules.onboarding.validation import validate_weekly_hours
from pathwise.shared.config import get_settings
from pathwise.shared.constants import (
    WEEKLY_HOURS_DEFAULT,
    WEEKLY_HOURS_RECOMMENDED_MAX,
    WEEKLY_HOURS_RECOMMENDED_MIN,
)
from pathwise.shared.exceptions import PathwiseException

onboard_app = typer.Typer(help="Learning path onboarding")
console = Console()


def _report_result(result: WizardResult) -> None:
    if isinstance(result, CompletionResult):
        console.print("\n[bold green]Your learning path is ready![/bold green]")
        console.print(f"Roadmap ID: [cyan]{result.roadmap_id}[/cyan]")
        return

    console.print("\n[bold green]Preferences updated.[/bold green]")
    if result.roadmap_regenerated:
        console.print(f"New roadmap ID: [cyan]{result.new_roadmap_id}[/cyan]")
        console.print(f"Modules with kept progress: {result.preserved_modules_count}")


@onboard_app.command("start")
def start(
    fresh: bool = typer.Option(
        False,
        "--fresh",
        help="Discard saved answers and start from step 1",
    ),
) -> None:
    """Start or resume the onboarding wizard."""
    auth = require_auth()
    settings = get_settings()

    async def _run() -> Optional[WizardResult]:
        api = create_onboarding_client(auth, settings)
        async with WizardController(api, auth=auth, settings=settings) as controller:
            status = await controller.load()
            if controller.error:
                display_error(controller.error)
                raise typer.Exit(1)
            if status is not None and status.is_complete and not fresh:
                console.print(
                    "[yellow]Onboarding is already complete.[/yellow] "
                    "Use 'pathwise onboard preferences' to change your answers."
                )
                return None
            if fresh:
                controller.reset_onboarding()
            elif status is not None:
                console.print(
                    f"[dim]Resuming at step {int(controller.current_step)}.[/dim]"
                )
            return await run_wizard(controller, RichPrompter(console), console)

    console.print(Panel.fit(
        "[bold cyan]Pathwise Onboarding[/bold cyan]\n"
        "Answer a few questions and we'll build your learning path.",
        border_style="cyan",
    ))

    try:
        result = run_async(_run())
    except PathwiseException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    if result is not None:
        _report_result(result)


@onboard_app.command("status")
def status() -> None:
    """Show onboarding progress stored on the server."""
    auth = require_auth()

    async def _fetch() -> Optional[OnboardingStatus]:
        api = create_onboarding_client(auth)
        controller = WizardController(api, auth=auth)
        loaded = await controller.load()
        if controller.error:
            display_error(controller.error)
            raise typer.Exit(1)
        return loaded

    try:
        display_status(run_async(_fetch()))
    except PathwiseException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)


@onboard_app.command("preferences")
def preferences() -> None:
    """Edit completed onboarding answers and regenerate the roadmap."""
    auth = require_auth()
    settings = get_settings()

    async def _run() -> Optional[WizardResult]:
        api = create_onboarding_client(auth, settings)
        current = await api.get_current_preferences()
        if current is None:
            console.print(
                "[yellow]No preferences found.[/yellow] Run 'pathwise onboard start' first."
            )
            return None

        async with WizardController(
            api, auth=auth, settings=settings, mode=SubmissionMode.UPDATE
        ) as controller:
            controller.hydrate(current)
            controller.go_to_step(OnboardingStep.SUMMARY)
            return await run_wizard(controller, RichPrompter(console), console)

    console.print(Panel.fit(
        "[bold cyan]Update Preferences[/bold cyan]\n"
        "Saving new preferences regenerates your roadmap.",
        border_style="cyan",
    ))

    try:
        result = run_async(_run())
    except PathwiseException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    if result is not None:
        _report_result(result)


@onboard_app.command("estimate")
def estimate(
    target: TargetRole = typer.Option(
        TargetRole.ML_ENGINEER,
        "--target",
        help="Target role",
    ),
    hours: int = typer.Option(
        WEEKLY_HOURS_DEFAULT,
        "--hours",
        help="Hours per week",
    ),
    skip: Optional[List[str]] = typer.Option(
        None,
        "--skip",
        help="Slug of a skill you already know (repeatable)",
    ),
) -> None:
    """Estimate how long a learning path takes, without logging in."""
    message = validate_weekly_hours(hours)
    if message:
        console.print(f"[red]Error:[/red] {message}")
        raise typer.Exit(1)

    skipped = {}
    for slug in skip or []:
        skill = get_prerequisite_skill_by_slug(slug)
        if skill is None:
            console.print(f"[red]Error:[/red] Unknown skill: {slug}")
            raise typer.Exit(1)
        skipped[skill.id] = skill

    metadata = TARGET_ROLE_METADATA[target]
    total_hours = calculate_adjusted_total_hours(metadata.estimated_hours, len(skipped))
    weeks = calculate_completion_weeks(hours, total_hours)

    console.print(f"[bold]{TARGET_ROLE_NAMES[target]}[/bold]")
    if not metadata.is_available:
        console.print("[yellow]This path is coming soon.[/yellow]")
    console.print(f"Total content: ~{total_hours} hours")
    if skipped:
        console.print("Skipping: " + ", ".join(skill.name for skill in skipped.values()))
    console.print(f"At {hours} hours/week: [green]{format_duration(weeks)}[/green]")
    if not is_in_recommended_range(hours):
        console.print(
            f"[dim]Most learners do best with {WEEKLY_HOURS_RECOMMENDED_MIN}-"
            f"{WEEKLY_HOURS_RECOMMENDED_MAX} hours/week.[/dim]"
        )
