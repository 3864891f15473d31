"""Onboarding module - The five-step learning path wizard."""

from pathwise.modules.onboarding.autosave import AutoSaveChannel, DebouncedTask
from pathwise.modules.onboarding.catalog import (
    CURRENT_ROLE_NAMES,
    PREREQUISITE_SKILLS,
    TARGET_ROLE_METADATA,
    TARGET_ROLE_NAMES,
    CurrentRole,
    PrerequisiteSkill,
    TargetRole,
    TargetRoleMetadata,
)
from pathwise.modules.onboarding.client import OnboardingApiClient, create_onboarding_client
from pathwise.modules.onboarding.controller import WizardController, create_wizard_controller
from pathwise.modules.onboarding.interface import (
    ActiveStep,
    AuthContext,
    CurrentRoleStep,
    IOnboardingApi,
    OnboardingStep,
    SkillsStep,
    SubmissionMode,
    SummaryStep,
    TargetRoleStep,
    WeeklyHoursStep,
    WizardState,
)
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
    UpdatePreferencesRequest,
    UpdatePreferencesResult,
)
from pathwise.modules.onboarding.validation import (
    SummaryValidation,
    get_step_error,
    is_step_complete,
    validate_summary_data,
)

__all__ = [
    # Catalog
    "CurrentRole",
    "TargetRole",
    "TargetRoleMetadata",
    "PrerequisiteSkill",
    "CURRENT_ROLE_NAMES",
    "TARGET_ROLE_NAMES",
    "TARGET_ROLE_METADATA",
    "PREREQUISITE_SKILLS",
    # Interface
    "IOnboardingApi",
    "AuthContext",
    "OnboardingStep",
    "SubmissionMode",
    "WizardState",
    "ActiveStep",
    "CurrentRoleStep",
    "TargetRoleStep",
    "WeeklyHoursStep",
    "SkillsStep",
    "SummaryStep",
    # Schemas
    "Step1Data",
    "Step2Data",
    "Step3Data",
    "Step4Data",
    "OnboardingData",
    "OnboardingResponse",
    "OnboardingStatus",
    "CompleteOnboardingRequest",
    "UpdatePreferencesRequest",
    "CompletionResult",
    "UpdatePreferencesResult",
    # Validation
    "SummaryValidation",
    "is_step_complete",
    "get_step_error",
    "validate_summary_data",
    # Services
    "AutoSaveChannel",
    "DebouncedTask",
    "OnboardingApiClient",
    "create_onboarding_client",
    "WizardController",
    "create_wizard_controller",
]
