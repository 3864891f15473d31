"""Per-step completeness rules for the onboarding wizard.

Every function here is pure: it only looks at the payload it is given and
the static catalog, so the rules can be exercised without a controller,
a backend or a terminal.
"""

from dataclasses import dataclass, field

from pathwise.modules.onboarding.catalog import (
    CurrentRole,
    TARGET_ROLE_NAMES,
    is_target_role_available,
)
from pathwise.modules.onboarding.schemas import (
    OnboardingData,
    Step1Data,
    Step2Data,
    Step3Data,
    Step4Data,
    StepData,
)
from pathwise.shared.constants import (
    MAX_CUSTOM_ROLE_LENGTH,
    MIN_CUSTOM_ROLE_LENGTH,
    SUMMARY_STEP,
    WEEKLY_HOURS_MAX,
    WEEKLY_HOURS_MIN,
)

# User-facing messages
CURRENT_ROLE_REQUIRED = "Please select your current role before proceeding"
CUSTOM_ROLE_REQUIRED = 'Please specify your role when selecting "Other"'
TARGET_ROLE_REQUIRED = "Please select your target role before proceeding"


@dataclass(frozen=True)
class SummaryValidation:
    """Result of checking the aggregate before generation."""

    is_valid: bool
    missing_steps: list[int] = field(default_factory=list)


# ==================
# Field Validators
# ==================


def validate_custom_role_text(text: str | None) -> str | None:
    """Validate the free-text role entered with "other".

    Returns:
        Error message, or None when the text is acceptable
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return CUSTOM_ROLE_REQUIRED
    if len(trimmed) < MIN_CUSTOM_ROLE_LENGTH:
        return f"Role must be at least {MIN_CUSTOM_ROLE_LENGTH} characters"
    if len(trimmed) > MAX_CUSTOM_ROLE_LENGTH:
        return f"Role must be at most {MAX_CUSTOM_ROLE_LENGTH} characters"
    return None


def validate_weekly_hours(hours: int | None) -> str | None:
    """Validate a weekly hours value.

    Returns:
        Error message, or None when the value is in range
    """
    if hours is None:
        return "Please choose how many hours per week you can commit"
    if not WEEKLY_HOURS_MIN <= hours <= WEEKLY_HOURS_MAX:
        return f"Weekly hours must be between {WEEKLY_HOURS_MIN} and {WEEKLY_HOURS_MAX}"
    return None


# ==================
# Step Rules
# ==================


def get_step1_error(data: Step1Data | None) -> str | None:
    if data is None or data.current_role is None:
        return CURRENT_ROLE_REQUIRED
    if data.current_role == CurrentRole.OTHER:
        # Only the minimum matters for advancing
        trimmed = (data.custom_role_text or "").strip()
        if len(trimmed) < MIN_CUSTOM_ROLE_LENGTH:
            return CUSTOM_ROLE_REQUIRED
    return None


def get_step2_error(data: Step2Data | None) -> str | None:
    if data is None or data.target_role is None:
        return TARGET_ROLE_REQUIRED
    if not is_target_role_available(data.target_role):
        name = TARGET_ROLE_NAMES.get(data.target_role, data.target_role.value)
        return f"The {name} path is coming soon. Please select an available path"
    return None


def get_step3_error(data: Step3Data | None) -> str | None:
    return validate_weekly_hours(data.weekly_hours if data else None)


def get_step4_error(data: Step4Data | None) -> str | None:
    # Optional step: zero, some or all skills are all valid
    return None


def is_step1_complete(data: Step1Data | None) -> bool:
    return get_step1_error(data) is None


def is_step2_complete(data: Step2Data | None) -> bool:
    return get_step2_error(data) is None


def is_step3_complete(data: Step3Data | None) -> bool:
    return get_step3_error(data) is None


def is_step4_complete(data: Step4Data | None) -> bool:
    return True


_STEP_ERRORS = {
    1: get_step1_error,
    2: get_step2_error,
    3: get_step3_error,
    4: get_step4_error,
}


def get_step_error(
    step: int,
    data: StepData | OnboardingData | None,
) -> str | None:
    """Return the message for the first rule the step's data breaks.

    Args:
        step: Step number (1-5)
        data: The step's payload, or the aggregate for the summary step

    Returns:
        User-facing error message, or None when the step is complete
    """
    if step == SUMMARY_STEP:
        aggregate = data if isinstance(data, OnboardingData) else OnboardingData()
        validation = validate_summary_data(aggregate)
        if validation.is_valid:
            return None
        return format_missing_steps(validation.missing_steps)

    check = _STEP_ERRORS.get(step)
    if check is None:
        raise ValueError(f"Unknown onboarding step: {step}")
    return check(data)


def is_step_complete(step: int, data: StepData | OnboardingData | None) -> bool:
    """Check whether the given step may be left in the forward direction."""
    return get_step_error(step, data) is None


# ==================
# Aggregate Rules
# ==================


def validate_summary_data(data: OnboardingData) -> SummaryValidation:
    """Check that every required step has data.

    Step 4 is optional and is never reported as missing.
    """
    missing_steps: list[int] = []

    if data.step1 is None or data.step1.current_role is None:
        missing_steps.append(1)
    if data.step2 is None or data.step2.target_role is None:
        missing_steps.append(2)
    if data.step3 is None or not data.step3.weekly_hours:
        missing_steps.append(3)

    return SummaryValidation(
        is_valid=not missing_steps,
        missing_steps=missing_steps,
    )


def format_missing_steps(missing_steps: list[int]) -> str:
    steps = ", ".join(f"Step {step}" for step in missing_steps)
    return f"Please complete the following before generating your path: {steps}"
