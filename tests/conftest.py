"""Test configuration and fixtures."""

from pathlib import Path

# Load environment variables before any imports that need them
from dotenv import load_dotenv
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

import pytest
from unittest.mock import AsyncMock

from pathwise.modules.onboarding import (
    AuthContext,
    CompletionResult,
    CurrentRole,
    OnboardingData,
    Step1Data,
    Step2Data,
    Step3Data,
    Step4Data,
    TargetRole,
    UpdatePreferencesResult,
    WizardController,
)
from pathwise.shared.config import Settings
from pathwise.shared.exceptions import OnboardingNotFoundError

# Short enough to keep tests fast, long enough that three
# back-to-back edits land inside one window
TEST_DEBOUNCE_SECONDS = 0.02


@pytest.fixture
def settings():
    """Settings pointed at a fake backend."""
    return Settings(
        environment="development",
        api_base_url="http://test.local/api/v1/",
        api_token=None,
        autosave_debounce_ms=int(TEST_DEBOUNCE_SECONDS * 1000),
    )


@pytest.fixture
def auth():
    """Authenticated context."""
    return AuthContext(access_token="test-token")


@pytest.fixture
def mock_api():
    """Mock onboarding backend with a brand-new user."""
    api = AsyncMock()
    api.get_status.side_effect = OnboardingNotFoundError()
    api.save_step.return_value = None
    api.complete_onboarding.return_value = CompletionResult(roadmap_id="roadmap-1")
    api.update_preferences.return_value = UpdatePreferencesResult(
        roadmap_regenerated=True,
        new_roadmap_id="roadmap-2",
        preserved_modules_count=3,
    )
    api.get_current_preferences.return_value = None
    return api


@pytest.fixture
async def controller(mock_api, auth, settings):
    """Controller in first-time onboarding mode."""
    wizard = WizardController(
        mock_api,
        auth=auth,
        settings=settings,
        debounce_seconds=TEST_DEBOUNCE_SECONDS,
    )
    yield wizard
    await wizard.close()


@pytest.fixture
def python_basics_id():
    return "a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d"


@pytest.fixture
def complete_data(python_basics_id):
    """Aggregate with every step answered."""
    return OnboardingData(
        step1=Step1Data(current_role=CurrentRole.BACKEND_DEVELOPER),
        step2=Step2Data(target_role=TargetRole.ML_ENGINEER),
        step3=Step3Data(weekly_hours=10),
        step4=Step4Data(skills_to_skip=frozenset({python_basics_id})),
    )
