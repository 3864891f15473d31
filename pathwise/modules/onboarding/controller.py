"""Wizard controller - owns the onboarding state and drives its transitions.

State machine:
    CURRENT_ROLE -> TARGET_ROLE -> WEEKLY_HOURS -> SKILLS -> SUMMARY

Forward moves are gated on the current step being complete, backward
moves and summary "edit" jumps are not. A successful submission resets the
aggregate and ends the flow.

Local state is authoritative. Step data is updated synchronously and
persisted in the background; a failed save never rolls the local value
back, the next save (automatic or via retry_save) re-sends the latest
payload. Last write wins.
"""

import logging
from enum import Enum

from pathwise.modules.onboarding.autosave import AutoSaveChannel
from pathwise.modules.onboarding.catalog import CurrentRole, TargetRole
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
    STEP_MODELS,
    Step1Data,
    Step2Data,
    Step3Data,
    Step4Data,
    StepData,
    UpdatePreferencesRequest,
    UpdatePreferencesResult,
)
from pathwise.modules.onboarding.validation import (
    format_missing_steps,
    get_step_error,
    validate_summary_data,
    validate_weekly_hours,
)
from pathwise.shared.config import Settings, get_settings
from pathwise.shared.exceptions import OnboardingNotFoundError, PathwiseException

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Something went wrong. Please try again."


class _ErrorKind(str, Enum):
    VALIDATION = "validation"
    PERSISTENCE = "persistence"
    SUBMISSION = "submission"
    LOAD = "load"


_VARIANTS = {
    OnboardingStep.CURRENT_ROLE: CurrentRoleStep,
    OnboardingStep.TARGET_ROLE: TargetRoleStep,
    OnboardingStep.WEEKLY_HOURS: WeeklyHoursStep,
    OnboardingStep.SKILLS: SkillsStep,
}


class WizardController:
    """Drives the five-step onboarding wizard.

    Collaborators are injected: the backend client, the auth context and
    the settings. Nothing here reads module-level singletons.

    Every network error is caught and stored as a string in state.error;
    no method raises into the caller for backend failures.
    """

    def __init__(
        self,
        api: IOnboardingApi,
        *,
        auth: AuthContext | None = None,
        settings: Settings | None = None,
        mode: SubmissionMode = SubmissionMode.CREATE,
        debounce_seconds: float | None = None,
    ) -> None:
        self._api = api
        self._auth = auth
        self._settings = settings or get_settings()
        self.mode = mode

        if debounce_seconds is None:
            debounce_seconds = self._settings.autosave_debounce_seconds
        self._autosave = AutoSaveChannel(
            self._persist,
            debounce_seconds,
            on_saving_changed=self._on_saving_changed,
        )

        self._state = WizardState()
        self._error_kind: _ErrorKind | None = None
        # Bumped on reset so late save results cannot touch a fresh session
        self._generation = 0

    async def __aenter__(self) -> "WizardController":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ==================
    # Read Access
    # ==================

    @property
    def state(self) -> WizardState:
        """Current state. Treat as read-only; mutate through the methods."""
        return self._state

    @property
    def current_step(self) -> OnboardingStep:
        return self._state.current_step

    @property
    def data(self) -> OnboardingData:
        return self._state.data

    @property
    def error(self) -> str | None:
        return self._state.error

    @property
    def autosave_enabled(self) -> bool:
        # Preference edits are only sent once, as a whole, on confirmation
        return self.mode is SubmissionMode.CREATE

    @property
    def active_step(self) -> ActiveStep:
        """The current step as a variant carrying its own data."""
        step = self._state.current_step
        if step is OnboardingStep.SUMMARY:
            return self.get_summary()
        return _VARIANTS[step](self._state.data.get(step))

    def get_summary(self) -> SummaryStep:
        validation = validate_summary_data(self._state.data)
        return SummaryStep(
            data=self._state.data,
            missing_steps=tuple(validation.missing_steps),
        )

    def has_pending_saves(self) -> bool:
        return self._autosave.has_pending()

    # ==================
    # Loading
    # ==================

    async def load(self) -> OnboardingStatus | None:
        """Fetch saved progress and hydrate the wizard.

        A 404 means the user has not started yet and leaves a fresh wizard.
        Any other failure is stored in state.error; call load() again to
        retry.

        Returns:
            The backend status, or None when there is none
        """
        if self._state.is_loading:
            return None
        if self._auth is not None and not self._auth.is_authenticated:
            logger.debug("No credential available, starting onboarding fresh")
            return None

        self._state.is_loading = True
        self._clear_error()
        try:
            status = await self._api.get_status()
        except OnboardingNotFoundError:
            logger.info("No onboarding session yet, starting fresh")
            self._state.data = OnboardingData()
            self._state.current_step = OnboardingStep.CURRENT_ROLE
            return None
        except PathwiseException as e:
            logger.warning(f"Failed to load onboarding status: {e.message}")
            self._set_error(e.message, _ErrorKind.LOAD)
            return None
        except Exception as e:
            logger.exception(f"Unexpected error loading onboarding status: {e}")
            self._set_error(UNEXPECTED_ERROR_MESSAGE, _ErrorKind.LOAD)
            return None
        finally:
            self._state.is_loading = False

        if status.response is not None:
            self.hydrate(status.response, status.current_step)
        return status

    def hydrate(
        self,
        response: OnboardingResponse,
        current_step: int | None = None,
    ) -> None:
        """Prefill step data from stored answers.

        Values the client does not recognise are skipped so the user is
        asked for them again.
        """
        data = OnboardingData()

        if response.current_role:
            try:
                role = CurrentRole(response.current_role)
            except ValueError:
                logger.warning(f"Ignoring unknown current role: {response.current_role!r}")
            else:
                data = data.with_step(1, Step1Data(
                    current_role=role,
                    custom_role_text=response.custom_role_text,
                ))

        if response.target_role:
            try:
                target = TargetRole(response.target_role)
            except ValueError:
                logger.warning(f"Ignoring unknown target role: {response.target_role!r}")
            else:
                data = data.with_step(2, Step2Data(target_role=target))

        if response.weekly_hours is not None:
            data = data.with_step(3, Step3Data(weekly_hours=response.weekly_hours))

        if response.skills_to_skip is not None:
            data = data.with_step(4, Step4Data(skills_to_skip=frozenset(response.skills_to_skip)))

        self._state.data = data
        if current_step is not None:
            self._state.current_step = OnboardingStep.clamp(current_step)

    # ==================
    # Transitions
    # ==================

    def go_to_step(self, step: int) -> OnboardingStep:
        """Jump to a step without validation (summary edit links)."""
        self._state.current_step = OnboardingStep.clamp(step)
        return self._state.current_step

    def save_step_data(self, step: int, payload: StepData) -> bool:
        """Store a step's payload locally and schedule its auto-save.

        Args:
            step: Step number (1-4)
            payload: The model for that step

        Returns:
            False if the payload was rejected (out-of-range weekly hours)

        Raises:
            TypeError: If payload is not the model for step
        """
        model = STEP_MODELS.get(step)
        if model is None:
            raise ValueError(f"Step {step} does not accept data")
        if not isinstance(payload, model):
            raise TypeError(
                f"Step {step} expects {model.__name__}, got {type(payload).__name__}"
            )

        if isinstance(payload, Step3Data):
            message = validate_weekly_hours(payload.weekly_hours)
            if message:
                self._set_error(message, _ErrorKind.VALIDATION)
                return False

        self._state.data = self._state.data.with_step(step, payload)
        if self._error_kind is _ErrorKind.VALIDATION:
            self._clear_error()

        if self.autosave_enabled:
            self._autosave.schedule(step, payload)
        return True

    async def go_to_next_step(self) -> bool:
        """Advance if the current step is complete.

        Pending saves are flushed first so nothing typed on this step is
        lost.

        Returns:
            True if the wizard moved forward
        """
        await self._autosave.flush()

        step = self._state.current_step
        if step is OnboardingStep.SUMMARY:
            return False

        message = get_step_error(step, self._state.data.get(step))
        if message:
            self._set_error(message, _ErrorKind.VALIDATION)
            return False

        self._clear_error()
        self._state.current_step = OnboardingStep(step + 1)
        return True

    async def go_to_previous_step(self) -> OnboardingStep:
        """Go back one step. Never validated."""
        await self._autosave.flush()
        self._state.current_step = OnboardingStep.clamp(self._state.current_step - 1)
        return self._state.current_step

    def reset_onboarding(self) -> None:
        """Start over: drop pending saves, clear all answers, back to step 1."""
        self._autosave.cancel_all()
        self._generation += 1
        self._state.data = OnboardingData()
        self._state.current_step = OnboardingStep.CURRENT_ROLE
        self._state.has_attempted_generation = False
        self._state.is_complete = False
        self._clear_error()

    async def retry_save(self) -> None:
        """Re-send the latest local payload of every answered step."""
        if not self.autosave_enabled:
            return
        for step in STEP_MODELS:
            payload = self._state.data.get(step)
            if payload is not None:
                await self._autosave.send_now(step, payload)

    async def close(self) -> None:
        """Teardown: flush anything still waiting on the debounce timer."""
        await self._autosave.close()

    # ==================
    # Submission
    # ==================

    async def handle_generate_click(
        self,
    ) -> CompletionResult | UpdatePreferencesResult | None:
        """Validate the aggregate and request roadmap generation.

        Returns:
            The backend result on success, None when blocked or failed
        """
        if self._state.is_loading:
            return None
        self._state.has_attempted_generation = True

        validation = validate_summary_data(self._state.data)
        if not validation.is_valid:
            self._set_error(format_missing_steps(validation.missing_steps), _ErrorKind.VALIDATION)
            return None
        for step in STEP_MODELS:
            message = get_step_error(step, self._state.data.get(step))
            if message:
                self._set_error(message, _ErrorKind.VALIDATION)
                return None

        await self._autosave.flush()

        self._state.is_loading = True
        self._clear_error()
        try:
            if self.mode is SubmissionMode.UPDATE:
                result = await self._api.update_preferences(
                    UpdatePreferencesRequest.from_aggregate(self._state.data)
                )
            else:
                result = await self._api.complete_onboarding(
                    CompleteOnboardingRequest.from_aggregate(self._state.data)
                )
        except PathwiseException as e:
            logger.warning(f"Roadmap generation failed: {e.message}")
            self._set_error(e.message, _ErrorKind.SUBMISSION)
            return None
        except Exception as e:
            logger.exception(f"Unexpected error during roadmap generation: {e}")
            self._set_error(UNEXPECTED_ERROR_MESSAGE, _ErrorKind.SUBMISSION)
            return None
        finally:
            self._state.is_loading = False

        logger.info(f"Onboarding submitted ({self.mode.value})")
        self.reset_onboarding()
        self._state.is_complete = True
        return result

    # ==================
    # Internals
    # ==================

    async def _persist(self, step: int, payload: StepData) -> None:
        generation = self._generation

        if self._auth is not None and not self._auth.is_authenticated:
            self._set_error("Authentication required", _ErrorKind.PERSISTENCE)
            return

        try:
            await self._api.save_step(step, payload)
        except PathwiseException as e:
            logger.warning(f"Auto-save for step {step} failed: {e.message}")
            if generation == self._generation:
                self._set_error(e.message, _ErrorKind.PERSISTENCE)
            return
        except Exception as e:
            logger.exception(f"Unexpected error saving step {step}: {e}")
            if generation == self._generation:
                self._set_error("Unable to save. Please try again.", _ErrorKind.PERSISTENCE)
            return

        if generation == self._generation and self._error_kind is _ErrorKind.PERSISTENCE:
            self._clear_error()

    def _on_saving_changed(self, saving: bool) -> None:
        self._state.is_saving = saving

    def _set_error(self, message: str, kind: _ErrorKind) -> None:
        self._state.error = message
        self._error_kind = kind

    def _clear_error(self) -> None:
        self._state.error = None
        self._error_kind = None


def create_wizard_controller(
    auth: AuthContext,
    settings: Settings | None = None,
    mode: SubmissionMode = SubmissionMode.CREATE,
) -> WizardController:
    """Wire a controller to the configured backend."""
    from pathwise.modules.onboarding.client import create_onboarding_client

    settings = settings or get_settings()
    return WizardController(
        create_onboarding_client(auth, settings),
        auth=auth,
        settings=settings,
        mode=mode,
    )
