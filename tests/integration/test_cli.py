"""Integration tests for the CLI and the interactive wizard loop."""

import io

import pytest
from rich.console import Console
from typer.testing import CliRunner

from pathwise.cli import state as state_module
from pathwise.cli.commands import auth as auth_commands
from pathwise.cli.main import app
from pathwise.cli.state import StateManager
from pathwise.cli.wizard import run_wizard
from pathwise.modules.onboarding.catalog import CurrentRole, TargetRole, PREREQUISITE_SKILLS
from pathwise.modules.onboarding.controller import WizardController
from pathwise.modules.onboarding.interface import OnboardingStep, SubmissionMode
from pathwise.modules.onboarding.schemas import CompleteOnboardingRequest, CompletionResult
from pathwise.shared.config import Settings

runner = CliRunner()


class ScriptedPrompter:
    """Prompter that replays canned answers."""

    def __init__(self, answers, confirm=True):
        self._answers = list(answers)
        self._confirm = confirm
        self.prompts = []

    async def ask(self, prompt, default=None):
        self.prompts.append(prompt)
        return self._answers.pop(0)

    async def confirm(self, prompt, default=True):
        self.prompts.append(prompt)
        return self._confirm


@pytest.fixture
def quiet_console():
    return Console(file=io.StringIO())


@pytest.fixture
def wizard(mock_api, auth, settings):
    return WizardController(mock_api, auth=auth, settings=settings, debounce_seconds=0.01)


class TestRunWizard:
    """Test the interactive wizard with scripted answers."""

    @pytest.mark.asyncio
    async def test_walks_all_steps_and_generates(self, wizard, mock_api, quiet_console):
        prompter = ScriptedPrompter([
            "1",      # Backend Developer
            "1",      # ML Engineer
            "12",     # hours per week
            "1 2",    # skip Python Basics and Linear Algebra
            "",       # continue
            "g",      # generate
        ])

        result = await run_wizard(wizard, prompter, quiet_console)

        assert result == CompletionResult(roadmap_id="roadmap-1")
        request = mock_api.complete_onboarding.await_args.args[0]
        assert isinstance(request, CompleteOnboardingRequest)
        assert request.current_role is CurrentRole.BACKEND_DEVELOPER
        assert request.target_role is TargetRole.ML_ENGINEER
        assert request.weekly_hours == 12
        assert request.skills_to_skip == sorted([PREREQUISITE_SKILLS[0].id, PREREQUISITE_SKILLS[1].id])

    @pytest.mark.asyncio
    async def test_other_role_asks_for_description(self, wizard, mock_api, quiet_console):
        prompter = ScriptedPrompter(["6", "Product Manager", "q"])

        assert await run_wizard(wizard, prompter, quiet_console) is None

        assert wizard.data.step1.custom_role_text == "Product Manager"
        assert wizard.current_step is OnboardingStep.TARGET_ROLE
        assert "Progress saved" in quiet_console.file.getvalue()
        mock_api.save_step.assert_awaited()

    @pytest.mark.asyncio
    async def test_invalid_hours_stay_on_step(self, wizard, quiet_console):
        wizard.go_to_step(3)
        prompter = ScriptedPrompter(["30", "q"])

        await run_wizard(wizard, prompter, quiet_console)

        assert wizard.current_step is OnboardingStep.WEEKLY_HOURS
        assert wizard.error == "Weekly hours must be between 5 and 20"

    @pytest.mark.asyncio
    async def test_edit_from_summary(self, wizard, quiet_console):
        wizard.go_to_step(5)
        prompter = ScriptedPrompter(["e3", "b", "q"])

        await run_wizard(wizard, prompter, quiet_console)

        # e3 jumps to hours, b goes back to target role, q quits there
        assert wizard.current_step is OnboardingStep.TARGET_ROLE

    @pytest.mark.asyncio
    async def test_update_mode_declined_confirmation(self, mock_api, auth, settings, complete_data, quiet_console):
        controller = WizardController(mock_api, auth=auth, settings=settings, mode=SubmissionMode.UPDATE)
        for step in (1, 2, 3, 4):
            controller.save_step_data(step, complete_data.get(step))
        controller.go_to_step(5)
        prompter = ScriptedPrompter(["g", "q"], confirm=False)

        assert await run_wizard(controller, prompter, quiet_console) is None
        mock_api.update_preferences.assert_not_awaited()


class TestCommands:
    """Test typer commands."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "onboard" in result.output
        assert "auth" in result.output

    def test_estimate_default_path(self):
        result = runner.invoke(app, ["onboard", "estimate", "--hours", "10"])

        assert result.exit_code == 0
        assert "ML Engineer" in result.output
        assert "~8 months" in result.output

    def test_estimate_with_skipped_skills(self):
        result = runner.invoke(app, [
            "onboard", "estimate",
            "--hours", "10",
            "--skip", "python-basics",
            "--skip", "linear-algebra",
        ])

        assert result.exit_code == 0
        assert "~280 hours" in result.output
        assert "~7 months" in result.output

    def test_estimate_counts_repeated_skill_once(self):
        result = runner.invoke(app, [
            "onboard", "estimate",
            "--hours", "5",
            "--skip", "python-basics",
            "--skip", "python-basics",
            "--skip", "python-basics",
        ])

        assert result.exit_code == 0
        assert "~290 hours" in result.output
        assert "~15 months" in result.output
        assert result.output.count("Python Basics") == 1

    def test_estimate_rejects_out_of_range_hours(self):
        result = runner.invoke(app, ["onboard", "estimate", "--hours", "25"])

        assert result.exit_code == 1
        assert "Weekly hours must be between 5 and 20" in result.output

    def test_estimate_rejects_unknown_skill(self):
        result = runner.invoke(app, ["onboard", "estimate", "--skip", "cooking"])

        assert result.exit_code == 1
        assert "Unknown skill: cooking" in result.output

    def test_estimate_coming_soon_role(self):
        result = runner.invoke(app, ["onboard", "estimate", "--target", "data_scientist"])

        assert result.exit_code == 0
        assert "coming soon" in result.output

    def test_start_requires_login(self, tmp_path, monkeypatch):
        monkeypatch.setattr(state_module, "get_state_manager", lambda: StateManager(tmp_path))
        monkeypatch.setattr(state_module, "get_settings", lambda: Settings(api_token=None))

        result = runner.invoke(app, ["onboard", "start"])

        assert result.exit_code == 1
        assert "pathwise auth login" in result.output

    def test_login_without_verification_then_logout(self, tmp_path, monkeypatch):
        manager = StateManager(tmp_path)
        monkeypatch.setattr(auth_commands, "get_state_manager", lambda: manager)

        result = runner.invoke(app, ["auth", "login", "--token", "abc", "--no-verify"])
        assert result.exit_code == 0
        assert manager.load().access_token == "abc"

        result = runner.invoke(app, ["auth", "logout"])
        assert result.exit_code == 0
        assert not manager.state_file.exists()
