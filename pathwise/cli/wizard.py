"""Interactive wizard loop - renders steps and feeds answers to the controller.

The loop never talks to the backend itself. Every answer goes through the
WizardController, which owns validation, auto-save and submission.
"""

from enum import Enum

from rich.console import Console

from pathwise.cli.ui.display import (
    display_current_roles,
    display_error,
    display_skills,
    display_step_header,
    display_summary,
    display_target_roles,
)
from pathwise.cli.ui.prompts import Prompter, parse_selection, render_menu
from pathwise.modules.onboarding.catalog import (
    PREREQUISITE_SKILLS,
    TARGET_ROLE_METADATA,
    CurrentRole,
    TargetRole,
    get_all_prerequisite_skill_ids,
)
from pathwise.modules.onboarding.controller import WizardController
from pathwise.modules.onboarding.interface import (
    CurrentRoleStep,
    SkillsStep,
    SubmissionMode,
    SummaryStep,
    TargetRoleStep,
    WeeklyHoursStep,
)
from pathwise.modules.onboarding.schemas import (
    CompletionResult,
    Step1Data,
    Step2Data,
    Step3Data,
    Step4Data,
    UpdatePreferencesResult,
)
from pathwise.modules.onboarding.summary import (
    calculate_adjusted_total_hours,
    calculate_completion_weeks,
    format_duration,
    is_in_recommended_range,
)
from pathwise.shared.constants import (
    WEEKLY_HOURS_DEFAULT,
    WEEKLY_HOURS_MAX,
    WEEKLY_HOURS_MIN,
    WEEKLY_HOURS_RECOMMENDED_MAX,
    WEEKLY_HOURS_RECOMMENDED_MIN,
)

BACK = "b"
QUIT = "q"

REGENERATE_WARNING = (
    "Changing preferences will regenerate your roadmap. "
    "Progress on matching modules is kept. Continue?"
)


class _Nav(Enum):
    CONTINUE = "continue"
    QUIT = "quit"


WizardResult = CompletionResult | UpdatePreferencesResult


async def run_wizard(
    controller: WizardController,
    prompter: Prompter,
    console: Console | None = None,
) -> WizardResult | None:
    """Run the wizard until the user submits or quits.

    Returns:
        The backend result on successful submission, None if the user quit
    """
    console = console or Console()

    while True:
        variant = controller.active_step
        display_step_header(variant.step)
        if controller.error:
            display_error(controller.error)

        if isinstance(variant, CurrentRoleStep):
            outcome = await _current_role_step(controller, prompter, variant)
        elif isinstance(variant, TargetRoleStep):
            outcome = await _target_role_step(controller, prompter, variant)
        elif isinstance(variant, WeeklyHoursStep):
            outcome = await _weekly_hours_step(controller, prompter, variant, console)
        elif isinstance(variant, SkillsStep):
            outcome = await _skills_step(controller, prompter, variant)
        else:
            outcome = await _summary_step(controller, prompter, variant, console)

        if outcome is _Nav.QUIT:
            await controller.close()
            if controller.autosave_enabled:
                console.print(
                    "[dim]Progress saved. Run 'pathwise onboard start' to continue.[/dim]"
                )
            return None
        if outcome is not _Nav.CONTINUE:
            return outcome


async def _navigate(controller: WizardController, answer: str) -> _Nav | None:
    """Handle the shared back/quit keys. None means the answer is not one."""
    if answer == QUIT:
        return _Nav.QUIT
    if answer == BACK:
        await controller.go_to_previous_step()
        return _Nav.CONTINUE
    return None


async def _current_role_step(
    controller: WizardController,
    prompter: Prompter,
    variant: CurrentRoleStep,
) -> _Nav:
    selected = variant.data.current_role if variant.data else None
    roles = display_current_roles(selected)
    default = str(roles.index(selected) + 1) if selected else None

    answer = (await prompter.ask("Your selection (q to quit)", default=default)).strip().lower()
    if answer == QUIT:
        return _Nav.QUIT

    indexes = parse_selection(answer, len(roles))
    if not indexes:
        display_error("Please enter a number from the list")
        return _Nav.CONTINUE

    role = roles[indexes[0]]
    custom_text = None
    if role == CurrentRole.OTHER:
        previous = variant.data.custom_role_text if variant.data else None
        custom_text = await prompter.ask("Describe your current role", default=previous)

    controller.save_step_data(1, Step1Data(current_role=role, custom_role_text=custom_text))
    await controller.go_to_next_step()
    return _Nav.CONTINUE


async def _target_role_step(
    controller: WizardController,
    prompter: Prompter,
    variant: TargetRoleStep,
) -> _Nav:
    selected = variant.data.target_role if variant.data else None
    roles = display_target_roles(selected)
    default = str(roles.index(selected) + 1) if selected else None

    answer = (await prompter.ask("Your selection (b back, q quit)", default=default)).strip().lower()
    nav = await _navigate(controller, answer)
    if nav is not None:
        return nav

    indexes = parse_selection(answer, len(roles))
    if not indexes:
        display_error("Please enter a number from the list")
        return _Nav.CONTINUE

    controller.save_step_data(2, Step2Data(target_role=roles[indexes[0]]))
    await controller.go_to_next_step()
    return _Nav.CONTINUE


async def _weekly_hours_step(
    controller: WizardController,
    prompter: Prompter,
    variant: WeeklyHoursStep,
    console: Console,
) -> _Nav:
    current = variant.data.weekly_hours if variant.data else WEEKLY_HOURS_DEFAULT

    target = controller.data.step2.target_role if controller.data.step2 else TargetRole.ML_ENGINEER
    total_hours = calculate_adjusted_total_hours(
        TARGET_ROLE_METADATA[target].estimated_hours,
        controller.data.skills_skipped_count,
    )
    console.print(
        f"How many hours per week can you dedicate to learning? "
        f"[dim]({WEEKLY_HOURS_MIN}-{WEEKLY_HOURS_MAX}, recommended "
        f"{WEEKLY_HOURS_RECOMMENDED_MIN}-{WEEKLY_HOURS_RECOMMENDED_MAX})[/dim]"
    )
    console.print(
        f"At {current} hours/week you would finish in about "
        f"{format_duration(calculate_completion_weeks(current, total_hours))}."
    )

    answer = (await prompter.ask("Hours per week (b back, q quit)", default=str(current))).strip().lower()
    nav = await _navigate(controller, answer)
    if nav is not None:
        return nav

    if not answer.isdigit():
        display_error("Please enter a whole number of hours")
        return _Nav.CONTINUE

    hours = int(answer)
    if not controller.save_step_data(3, Step3Data(weekly_hours=hours)):
        return _Nav.CONTINUE
    if is_in_recommended_range(hours):
        console.print("[green]Great choice, that's within the recommended range.[/green]")

    await controller.go_to_next_step()
    return _Nav.CONTINUE


async def _skills_step(
    controller: WizardController,
    prompter: Prompter,
    variant: SkillsStep,
) -> _Nav:
    selected = set(variant.data.skills_to_skip) if variant.data else set()
    all_ids = get_all_prerequisite_skill_ids()

    while True:
        display_skills(frozenset(selected))
        answer = (await prompter.ask(
            "Toggle numbers (a all, n none, Enter continue, b back, q quit)",
            default="",
        )).strip().lower()

        if not answer:
            if controller.data.step4 is None:
                controller.save_step_data(4, Step4Data(skills_to_skip=frozenset(selected)))
            await controller.go_to_next_step()
            return _Nav.CONTINUE

        nav = await _navigate(controller, answer)
        if nav is not None:
            return nav

        if answer == "a":
            selected = set(all_ids)
        elif answer == "n":
            selected = set()
        else:
            for index in parse_selection(answer, len(PREREQUISITE_SKILLS)):
                selected ^= {PREREQUISITE_SKILLS[index].id}

        # Each toggle is auto-saved; rapid toggles collapse into one request
        controller.save_step_data(4, Step4Data(skills_to_skip=frozenset(selected)))


async def _summary_step(
    controller: WizardController,
    prompter: Prompter,
    variant: SummaryStep,
    console: Console,
) -> WizardResult | _Nav:
    display_summary(variant, show_missing=controller.state.has_attempted_generation)

    generate_label = (
        "Save preferences and regenerate my path"
        if controller.mode is SubmissionMode.UPDATE
        else "Generate My Path"
    )
    render_menu("What next?", [
        ("g", generate_label),
        ("e1-e4", "Edit a step"),
        (BACK, "Back"),
        (QUIT, "Quit"),
    ])

    answer = (await prompter.ask("Your choice", default="g")).strip().lower()
    nav = await _navigate(controller, answer)
    if nav is not None:
        return nav

    if answer.startswith("e") and answer[1:].isdigit():
        controller.go_to_step(int(answer[1:]))
        return _Nav.CONTINUE

    if answer != "g":
        display_error("Please choose one of the options above")
        return _Nav.CONTINUE

    if controller.mode is SubmissionMode.UPDATE:
        if not await prompter.confirm(REGENERATE_WARNING, default=False):
            return _Nav.CONTINUE

    with console.status("Generating your learning path..."):
        result = await controller.handle_generate_click()
    if result is None:
        return _Nav.CONTINUE
    return result
