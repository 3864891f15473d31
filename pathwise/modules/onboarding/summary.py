"""Display derivations and the completion estimate for the summary step.

All functions are pure over the aggregate and the static catalog.
"""

import math
from dataclasses import dataclass

from pathwise.modules.onboarding.catalog import (
    CURRENT_ROLE_NAMES,
    CurrentRole,
    PREREQUISITE_SKILLS,
    TARGET_ROLE_METADATA,
    TARGET_ROLE_NAMES,
)
from pathwise.modules.onboarding.schemas import (
    OnboardingData,
    Step1Data,
    Step2Data,
    Step3Data,
    Step4Data,
)
from pathwise.shared.constants import (
    ASSUMED_HOURS_PER_SKILL,
    EMPTY_DURATION_TEXT,
    MIN_ADJUSTED_TOTAL_HOURS,
    NO_SKILLS_SKIPPED_TEXT,
    NOT_SELECTED_TEXT,
    UNABLE_TO_CALCULATE_TEXT,
    WEEKLY_HOURS_MAX,
    WEEKLY_HOURS_MIN,
    WEEKLY_HOURS_RECOMMENDED_MAX,
    WEEKLY_HOURS_RECOMMENDED_MIN,
    WEEKS_DISPLAY_THRESHOLD,
    WEEKS_PER_MONTH,
)


@dataclass(frozen=True)
class SummaryRow:
    """One line of the review screen."""

    step: int
    label: str
    value: str
    is_missing: bool = False


# ==================
# Time Estimates
# ==================


def calculate_completion_weeks(weekly_hours: float, total_hours: float) -> int:
    """Weeks needed to cover total_hours at weekly_hours per week.

    Returns 0 for any non-positive input.
    """
    if weekly_hours <= 0 or total_hours <= 0:
        return 0
    return math.ceil(total_hours / weekly_hours)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_duration(weeks: int) -> str:
    """Format a week count as "~N weeks" or, from 8 weeks, "~N months"."""
    if weeks <= 0:
        return EMPTY_DURATION_TEXT
    if weeks >= WEEKS_DISPLAY_THRESHOLD:
        months = _round_half_up(weeks / WEEKS_PER_MONTH)
        return f"~{months} month{'s' if months != 1 else ''}"
    return f"~{weeks} week{'s' if weeks != 1 else ''}"


def is_in_recommended_range(hours: int) -> bool:
    return WEEKLY_HOURS_RECOMMENDED_MIN <= hours <= WEEKLY_HOURS_RECOMMENDED_MAX


def calculate_slider_percentage(
    value: int,
    minimum: int = WEEKLY_HOURS_MIN,
    maximum: int = WEEKLY_HOURS_MAX,
) -> float:
    """Position of value on the hours slider, 0-100."""
    return ((value - minimum) / (maximum - minimum)) * 100


def calculate_adjusted_total_hours(base_hours: int, skills_skipped: int) -> int:
    """Path length after removing skipped prerequisite skills.

    Never drops below MIN_ADJUSTED_TOTAL_HOURS.
    """
    time_saved = skills_skipped * ASSUMED_HOURS_PER_SKILL
    return max(base_hours - time_saved, MIN_ADJUSTED_TOTAL_HOURS)


# ==================
# Display Text
# ==================


def get_current_role_display_name(step1: Step1Data | None) -> str:
    if step1 is None or step1.current_role is None:
        return NOT_SELECTED_TEXT
    if step1.current_role == CurrentRole.OTHER and step1.custom_role_text:
        return step1.custom_role_text.strip()
    return CURRENT_ROLE_NAMES.get(step1.current_role, NOT_SELECTED_TEXT)


def get_target_role_display_name(step2: Step2Data | None) -> str:
    if step2 is None or step2.target_role is None:
        return NOT_SELECTED_TEXT
    return TARGET_ROLE_NAMES.get(step2.target_role, NOT_SELECTED_TEXT)


def get_weekly_hours_display_text(step3: Step3Data | None) -> str:
    if step3 is None or not step3.weekly_hours:
        return NOT_SELECTED_TEXT
    return f"{step3.weekly_hours} hours/week"


def get_skills_to_skip_display_text(step4: Step4Data | None) -> str:
    if step4 is None or not step4.skills_to_skip:
        return NO_SKILLS_SKIPPED_TEXT
    return f"{len(step4.skills_to_skip)} of {len(PREREQUISITE_SKILLS)} skills"


def get_skill_names_to_skip(step4: Step4Data | None) -> list[str]:
    """Names of the skipped skills in catalog order; unknown IDs are dropped."""
    if step4 is None:
        return []
    names = []
    for skill in PREREQUISITE_SKILLS:
        if skill.id in step4.skills_to_skip:
            names.append(skill.name)
    return names


def get_estimated_completion_weeks(data: OnboardingData) -> int:
    """Estimated weeks to finish the path, or 0 when it cannot be computed."""
    if data.step2 is None or data.step3 is None or not data.step3.weekly_hours:
        return 0
    metadata = TARGET_ROLE_METADATA.get(data.step2.target_role)
    if metadata is None:
        return 0

    adjusted = calculate_adjusted_total_hours(
        metadata.estimated_hours, data.skills_skipped_count
    )
    return calculate_completion_weeks(data.step3.weekly_hours, adjusted)


def get_estimated_completion_text(data: OnboardingData) -> str:
    weeks = get_estimated_completion_weeks(data)
    if weeks <= 0:
        return UNABLE_TO_CALCULATE_TEXT
    return format_duration(weeks)


def build_summary_rows(data: OnboardingData, missing_steps: list[int] | None = None) -> list[SummaryRow]:
    """Ordered review rows for steps 1-4."""
    missing = set(missing_steps or [])
    return [
        SummaryRow(1, "Current Role", get_current_role_display_name(data.step1), 1 in missing),
        SummaryRow(2, "Target Role", get_target_role_display_name(data.step2), 2 in missing),
        SummaryRow(3, "Weekly Time", get_weekly_hours_display_text(data.step3), 3 in missing),
        SummaryRow(4, "Skills to Skip", get_skills_to_skip_display_text(data.step4), 4 in missing),
    ]
