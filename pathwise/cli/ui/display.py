"""Display Utilities - Rich output formatting for the wizard."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pathwise.modules.onboarding.catalog import (
    CURRENT_ROLE_DESCRIPTIONS,
    CURRENT_ROLE_NAMES,
    PREREQUISITE_SKILLS,
    SKILL_CATEGORIES,
    TARGET_ROLE_DESCRIPTIONS,
    TARGET_ROLE_METADATA,
    TARGET_ROLE_NAMES,
    CurrentRole,
    TargetRole,
)
from pathwise.modules.onboarding.interface import OnboardingStep, SummaryStep
from pathwise.modules.onboarding.schemas import OnboardingStatus
from pathwise.modules.onboarding.summary import (
    build_summary_rows,
    get_estimated_completion_text,
    get_skill_names_to_skip,
)
from pathwise.shared.constants import TOTAL_ONBOARDING_STEPS

console = Console()


def display_step_header(step: OnboardingStep) -> None:
    console.print(
        f"\n[bold cyan]Step {int(step)}/{TOTAL_ONBOARDING_STEPS}: {step.title}[/bold cyan]"
    )


def display_error(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")


def display_current_roles(selected: CurrentRole | None) -> list[CurrentRole]:
    """Print the current role options and return them in display order."""
    roles = list(CurrentRole)
    console.print("What best describes your current role?")
    for i, role in enumerate(roles, 1):
        marker = "[green]*[/green]" if role == selected else " "
        console.print(
            f" {marker}[{i}] [bold]{CURRENT_ROLE_NAMES[role]}[/bold] "
            f"[dim]- {CURRENT_ROLE_DESCRIPTIONS[role]}[/dim]"
        )
    return roles


def display_target_roles(selected: TargetRole | None) -> list[TargetRole]:
    """Print the target role cards and return them in display order."""
    roles = list(TargetRole)
    console.print("Which role do you want to grow into?")
    for i, role in enumerate(roles, 1):
        metadata = TARGET_ROLE_METADATA[role]
        marker = "[green]*[/green]" if role == selected else " "
        badge = "" if metadata.is_available else " [yellow](coming soon)[/yellow]"
        console.print(
            f" {marker}[{i}] [bold]{TARGET_ROLE_NAMES[role]}[/bold]{badge} "
            f"[dim]- {TARGET_ROLE_DESCRIPTIONS[role]} (~{metadata.estimated_hours}h)[/dim]"
        )
    return roles


def display_skills(selected: frozenset[str]) -> None:
    """Print prerequisite skills grouped by category with checkboxes."""
    console.print("Select the skills you already know. They will be skipped in your path.")
    for category, info in SKILL_CATEGORIES.items():
        console.print(f"\n  [bold]{info['label']}[/bold] [dim]{info['description']}[/dim]")
        for number, skill in enumerate(PREREQUISITE_SKILLS, 1):
            if skill.category != category:
                continue
            box = "[green]\\[x][/green]" if skill.id in selected else "\\[ ]"
            console.print(f"   {box} {number}. {skill.name}")


def display_summary(summary: SummaryStep, show_missing: bool = False) -> None:
    """Display the review table for the summary step."""
    console.print(Panel.fit(
        "[bold green]Review your learning path[/bold green]",
        border_style="green",
    ))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Step", style="dim", width=6)
    table.add_column("Section", min_width=14)
    table.add_column("Your Selection", min_width=30)

    missing = list(summary.missing_steps) if show_missing else []
    for row in build_summary_rows(summary.data, missing):
        value = f"[red]{row.value}[/red]" if row.is_missing else row.value
        table.add_row(f"e{row.step}", row.label, value)

    console.print(table)

    skipped = get_skill_names_to_skip(summary.data.step4)
    if skipped:
        console.print("[dim]Skipping: " + ", ".join(skipped) + "[/dim]")

    console.print(
        f"\n[bold]Estimated completion:[/bold] {get_estimated_completion_text(summary.data)}"
    )


def display_status(status: OnboardingStatus | None) -> None:
    """Display server-side onboarding progress."""
    if status is None:
        console.print("[yellow]You have not started onboarding yet.[/yellow]")
        return

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row(
        "Onboarding",
        "[green]Completed[/green]" if status.is_complete else "[yellow]In progress[/yellow]",
    )
    table.add_row("Current step", f"{status.current_step}/{status.total_steps}")

    response = status.response
    if response is not None:
        table.add_row("Current role", response.custom_role_text or response.current_role or "-")
        table.add_row("Target role", response.target_role or "-")
        table.add_row(
            "Weekly hours",
            f"{response.weekly_hours} hours/week" if response.weekly_hours else "-",
        )
        table.add_row("Skills skipped", str(len(response.skills_to_skip or [])))
        if response.completed_at:
            table.add_row("Completed", response.completed_at.strftime("%Y-%m-%d %H:%M"))

    console.print(table)
