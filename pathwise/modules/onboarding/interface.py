"""Onboarding Module - Wizard state, step variants and backend interface."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Protocol

from pathwise.modules.onboarding.schemas import (
    CompleteOnboardingRequest,
    CompletionResult,
    OnboardingData,
    OnboardingResponse,
    OnboardingStatus,
    Step1Data,
    Step2Data,
    Step3Data,
    Step4Data,
    StepData,
    UpdatePreferencesRequest,
    UpdatePreferencesResult,
)
from pathwise.shared.constants import FIRST_STEP, SUMMARY_STEP


class OnboardingStep(IntEnum):
    """The five fixed wizard stages."""

    CURRENT_ROLE = 1
    TARGET_ROLE = 2
    WEEKLY_HOURS = 3
    SKILLS = 4
    SUMMARY = 5

    @classmethod
    def clamp(cls, value: int) -> "OnboardingStep":
        """Coerce any integer to the nearest valid step."""
        return cls(min(max(int(value), FIRST_STEP), SUMMARY_STEP))

    @property
    def title(self) -> str:
        return STEP_TITLES[self]

    @property
    def has_data(self) -> bool:
        return self is not OnboardingStep.SUMMARY


STEP_TITLES: dict[OnboardingStep, str] = {
    OnboardingStep.CURRENT_ROLE: "Current Role",
    OnboardingStep.TARGET_ROLE: "Target Role",
    OnboardingStep.WEEKLY_HOURS: "Weekly Time",
    OnboardingStep.SKILLS: "Existing Skills",
    OnboardingStep.SUMMARY: "Summary",
}


class SubmissionMode(str, Enum):
    """What the summary step's generate action does."""

    CREATE = "create"  # first-time onboarding, POST /onboarding/complete
    UPDATE = "update"  # re-onboarding, PUT /onboarding/preferences


# ==================
# Step Variants
# ==================


@dataclass(frozen=True)
class CurrentRoleStep:
    data: Step1Data | None
    step: OnboardingStep = OnboardingStep.CURRENT_ROLE


@dataclass(frozen=True)
class TargetRoleStep:
    data: Step2Data | None
    step: OnboardingStep = OnboardingStep.TARGET_ROLE


@dataclass(frozen=True)
class WeeklyHoursStep:
    data: Step3Data | None
    step: OnboardingStep = OnboardingStep.WEEKLY_HOURS


@dataclass(frozen=True)
class SkillsStep:
    data: Step4Data | None
    step: OnboardingStep = OnboardingStep.SKILLS


@dataclass(frozen=True)
class SummaryStep:
    """Review screen over the whole aggregate."""

    data: OnboardingData
    missing_steps: tuple[int, ...] = ()
    step: OnboardingStep = OnboardingStep.SUMMARY

    @property
    def is_valid(self) -> bool:
        return not self.missing_steps


ActiveStep = CurrentRoleStep | TargetRoleStep | WeeklyHoursStep | SkillsStep | SummaryStep


# ==================
# State
# ==================


@dataclass
class WizardState:
    """Everything the wizard shows at a given moment.

    Owned by the controller and mutated only through its transitions.
    """

    current_step: OnboardingStep = OnboardingStep.CURRENT_ROLE
    data: OnboardingData = field(default_factory=OnboardingData)
    is_loading: bool = False
    is_saving: bool = False
    error: str | None = None
    has_attempted_generation: bool = False
    is_complete: bool = False


@dataclass
class AuthContext:
    """Bearer credential supplied by whoever authenticated the user.

    The onboarding client never acquires or refreshes credentials itself.
    """

    access_token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    @property
    def authorization_header(self) -> dict[str, str]:
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}


# ==================
# Backend Interface
# ==================


class IOnboardingApi(Protocol):
    """Interface for the roadmap backend's onboarding endpoints."""

    async def get_status(self) -> OnboardingStatus:
        """Get the user's onboarding progress.

        Returns:
            OnboardingStatus with any answers saved so far

        Raises:
            OnboardingNotFoundError: If the user has no session yet
        """
        ...

    async def save_step(self, step: int, data: StepData) -> None:
        """Persist one step's payload.

        Args:
            step: Step number (1-4)
            data: Payload matching that step
        """
        ...

    async def complete_onboarding(
        self, request: CompleteOnboardingRequest
    ) -> CompletionResult:
        """Mark onboarding complete and trigger roadmap generation.

        Args:
            request: The full aggregate

        Returns:
            CompletionResult with the new roadmap ID if one was generated
        """
        ...

    async def update_preferences(
        self, request: UpdatePreferencesRequest
    ) -> UpdatePreferencesResult:
        """Replace all preferences of an onboarded user and regenerate.

        Args:
            request: The full aggregate

        Returns:
            UpdatePreferencesResult describing the regeneration
        """
        ...

    async def get_current_preferences(self) -> OnboardingResponse | None:
        """Get the stored answers, or None when the user never onboarded."""
        ...
