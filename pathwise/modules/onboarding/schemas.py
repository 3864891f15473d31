"""Pydantic schemas for onboarding step payloads and backend messages."""

from datetime import datetime

from pydantic import ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from pathwise.modules.onboarding.catalog import CurrentRole, TargetRole
from pathwise.shared.constants import (
    WEEKLY_HOURS_DEFAULT,
    WEEKLY_HOURS_MAX,
    WEEKLY_HOURS_MIN,
)
from pathwise.shared.exceptions import IncompleteStepError, InvalidWeeklyHoursError
from pathwise.shared.models import BaseSchema, WireSchema


class StepSchema(WireSchema):
    """Immutable payload for one wizard step."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


# ==================
# Step Payloads
# ==================


class Step1Data(StepSchema):
    """Current role selection."""

    current_role: CurrentRole = Field(
        ...,
        description="User's current job role",
    )

    custom_role_text: str | None = Field(
        default=None,
        description="Free-text role description when 'other' is selected",
    )


class Step2Data(StepSchema):
    """Target role selection."""

    target_role: TargetRole = Field(
        ...,
        description="Career role the learning path leads to",
    )


class Step3Data(StepSchema):
    """Weekly time budget.

    The range is enforced by the wizard controller rather than here so an
    out-of-range value surfaces as a wizard error instead of a crash.
    """

    weekly_hours: int = Field(
        default=WEEKLY_HOURS_DEFAULT,
        description="Hours per week available for learning",
    )


class Step4Data(StepSchema):
    """Prerequisite skills the user already knows."""

    skills_to_skip: frozenset[str] = Field(
        default_factory=frozenset,
        description="Skill IDs to exclude from the roadmap",
    )

    @field_serializer("skills_to_skip")
    def serialize_skills(self, skills: frozenset[str]) -> list[str]:
        return sorted(skills)


StepData = Step1Data | Step2Data | Step3Data | Step4Data

STEP_MODELS: dict[int, type[StepSchema]] = {
    1: Step1Data,
    2: Step2Data,
    3: Step3Data,
    4: Step4Data,
}


class OnboardingData(BaseSchema):
    """Aggregate of all four step payloads.

    This is the read-only summary view used for review and final
    validation. It is never persisted as a whole.
    """

    step1: Step1Data | None = None
    step2: Step2Data | None = None
    step3: Step3Data | None = None
    step4: Step4Data | None = None

    def get(self, step: int) -> StepData | None:
        """Return the payload for a data step (1-4)."""
        if step not in STEP_MODELS:
            raise ValueError(f"Step {step} does not carry data")
        return getattr(self, f"step{step}")

    def with_step(self, step: int, data: StepData | None) -> "OnboardingData":
        """Return a copy with one step's payload replaced."""
        if step not in STEP_MODELS:
            raise ValueError(f"Step {step} does not carry data")
        return self.model_copy(update={f"step{step}": data})

    @property
    def skills_skipped_count(self) -> int:
        return len(self.step4.skills_to_skip) if self.step4 else 0


# ==================
# Backend Messages
# ==================


class OnboardingResponse(WireSchema):
    """Stored onboarding answers as returned by the backend.

    Fields are nullable because an in-progress session only has the steps
    saved so far. Roles are kept as plain strings so an unknown value from
    a newer backend does not reject the whole payload.
    """

    id: str | None = None
    user_id: str | None = None
    current_role: str | None = None
    custom_role_text: str | None = None
    target_role: str | None = None
    weekly_hours: int | None = None
    skills_to_skip: list[str] | None = None
    completed_at: datetime | None = None
    created_at: datetime | None = None


class OnboardingStatus(WireSchema):
    """Current state of the user's onboarding progress."""

    is_complete: bool = False
    current_step: int = 1
    total_steps: int = 5
    response: OnboardingResponse | None = None


class CompleteOnboardingRequest(WireSchema):
    """Full aggregate sent when generating a roadmap."""

    current_role: CurrentRole
    custom_role_text: str | None = None
    target_role: TargetRole
    weekly_hours: int
    skills_to_skip: list[str] = Field(default_factory=list)

    @field_validator("custom_role_text")
    @classmethod
    def strip_custom_role_text(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @classmethod
    def from_aggregate(cls, data: OnboardingData) -> "CompleteOnboardingRequest":
        """Build the submission body from a complete aggregate.

        Raises:
            IncompleteStepError: If a required step is missing
            InvalidWeeklyHoursError: If weekly hours are out of range
        """
        for step in (1, 2, 3):
            if data.get(step) is None:
                raise IncompleteStepError(step, f"Step {step} is required before submitting")
        hours = data.step3.weekly_hours
        if not WEEKLY_HOURS_MIN <= hours <= WEEKLY_HOURS_MAX:
            raise InvalidWeeklyHoursError(hours, WEEKLY_HOURS_MIN, WEEKLY_HOURS_MAX)
        custom_text = None
        if data.step1.current_role == CurrentRole.OTHER:
            custom_text = data.step1.custom_role_text
        return cls(
            current_role=data.step1.current_role,
            custom_role_text=custom_text,
            target_role=data.step2.target_role,
            weekly_hours=data.step3.weekly_hours,
            skills_to_skip=sorted(data.step4.skills_to_skip) if data.step4 else [],
        )


class UpdatePreferencesRequest(CompleteOnboardingRequest):
    """Full aggregate sent when an existing user edits their preferences."""


class CompletionResult(WireSchema):
    """Outcome of completing onboarding."""

    onboarding_response: OnboardingResponse | None = None
    roadmap_id: str | None = None


class UpdatePreferencesResult(WireSchema):
    """Outcome of a preferences update."""

    onboarding_response: OnboardingResponse | None = None
    roadmap_regenerated: bool = False
    new_roadmap_id: str | None = None
    preserved_modules_count: int = 0
