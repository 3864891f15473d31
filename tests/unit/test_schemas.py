"""Unit tests for onboarding schemas."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from pathwise.modules.onboarding.catalog import CurrentRole, TargetRole
from pathwise.modules.onboarding.interface import OnboardingStep
from pathwise.modules.onboarding.schemas import (
    CompleteOnboardingRequest,
    OnboardingData,
    OnboardingStatus,
    Step1Data,
    Step2Data,
    Step3Data,
    Step4Data,
    UpdatePreferencesRequest,
)
from pathwise.shared.exceptions import IncompleteStepError, InvalidWeeklyHoursError


class TestStepPayloads:
    """Test per-step models."""

    def test_step1_payload_omits_missing_custom_text(self):
        data = Step1Data(current_role=CurrentRole.DATA_ANALYST)
        assert data.to_payload() == {"currentRole": "data_analyst"}

    def test_step1_payload_with_custom_text(self):
        data = Step1Data(current_role=CurrentRole.OTHER, custom_role_text="PM")
        assert data.to_payload() == {"currentRole": "other", "customRoleText": "PM"}

    def test_step3_default(self):
        assert Step3Data().weekly_hours == 10

    def test_step4_payload_sorted(self):
        data = Step4Data(skills_to_skip=frozenset({"b", "a", "c"}))
        assert data.to_payload() == {"skillsToSkip": ["a", "b", "c"]}

    def test_step4_accepts_camel_case(self):
        data = Step4Data.model_validate({"skillsToSkip": ["a", "a"]})
        assert data.skills_to_skip == frozenset({"a"})

    def test_payloads_are_frozen(self):
        data = Step2Data(target_role=TargetRole.ML_ENGINEER)
        with pytest.raises(PydanticValidationError):
            data.target_role = TargetRole.AI_ENGINEER

    def test_unknown_role_rejected(self):
        with pytest.raises(PydanticValidationError):
            Step1Data(current_role="astronaut")


class TestOnboardingData:
    """Test the aggregate."""

    def test_with_step_returns_copy(self):
        empty = OnboardingData()
        filled = empty.with_step(3, Step3Data(weekly_hours=12))

        assert empty.step3 is None
        assert filled.get(3) == Step3Data(weekly_hours=12)

    @pytest.mark.parametrize("step", [0, 5])
    def test_non_data_steps_rejected(self, step):
        with pytest.raises(ValueError):
            OnboardingData().get(step)
        with pytest.raises(ValueError):
            OnboardingData().with_step(step, None)

    def test_skills_skipped_count(self, complete_data):
        assert OnboardingData().skills_skipped_count == 0
        assert complete_data.skills_skipped_count == 1


class TestCompleteOnboardingRequest:
    """Test building the submission body."""

    def test_from_complete_aggregate(self, complete_data, python_basics_id):
        request = CompleteOnboardingRequest.from_aggregate(complete_data)

        assert request.to_payload() == {
            "currentRole": "backend_developer",
            "targetRole": "ml_engineer",
            "weeklyHours": 10,
            "skillsToSkip": [python_basics_id],
        }

    def test_custom_text_only_sent_for_other(self, complete_data):
        data = complete_data.with_step(1, Step1Data(
            current_role=CurrentRole.QA_ENGINEER,
            custom_role_text="stale text",
        ))
        assert CompleteOnboardingRequest.from_aggregate(data).custom_role_text is None

    def test_custom_text_trimmed(self, complete_data):
        data = complete_data.with_step(1, Step1Data(
            current_role=CurrentRole.OTHER,
            custom_role_text="  Product Manager  ",
        ))
        assert CompleteOnboardingRequest.from_aggregate(data).custom_role_text == "Product Manager"

    def test_missing_skills_step_sends_empty_list(self, complete_data):
        request = CompleteOnboardingRequest.from_aggregate(complete_data.with_step(4, None))
        assert request.skills_to_skip == []

    def test_missing_required_step(self, complete_data):
        with pytest.raises(IncompleteStepError) as exc_info:
            CompleteOnboardingRequest.from_aggregate(complete_data.with_step(2, None))

        assert exc_info.value.step == 2
        assert exc_info.value.field == "step2"

    def test_out_of_range_hours(self, complete_data):
        data = complete_data.with_step(3, Step3Data(weekly_hours=30))
        with pytest.raises(InvalidWeeklyHoursError):
            CompleteOnboardingRequest.from_aggregate(data)

    def test_update_request_same_shape(self, complete_data):
        request = UpdatePreferencesRequest.from_aggregate(complete_data)
        assert isinstance(request, UpdatePreferencesRequest)
        assert request.weekly_hours == 10


class TestOnboardingStatus:
    """Test backend status parsing."""

    def test_parse_camel_case(self):
        status = OnboardingStatus.model_validate({
            "isComplete": False,
            "currentStep": 3,
            "totalSteps": 5,
            "response": {
                "currentRole": "other",
                "customRoleText": "PM",
                "targetRole": "ml_engineer",
                "weeklyHours": None,
                "skillsToSkip": None,
            },
        })

        assert status.current_step == 3
        assert status.response.custom_role_text == "PM"
        assert status.response.weekly_hours is None

    def test_defaults(self):
        status = OnboardingStatus()
        assert status.is_complete is False
        assert status.current_step == 1
        assert status.response is None


class TestOnboardingStep:
    """Test the step enum."""

    @pytest.mark.parametrize("value,expected", [
        (-3, OnboardingStep.CURRENT_ROLE),
        (1, OnboardingStep.CURRENT_ROLE),
        (4, OnboardingStep.SKILLS),
        (9, OnboardingStep.SUMMARY),
    ])
    def test_clamp(self, value, expected):
        assert OnboardingStep.clamp(value) is expected

    def test_has_data(self):
        assert OnboardingStep.SKILLS.has_data is True
        assert OnboardingStep.SUMMARY.has_data is False
