"""HTTP client for the roadmap backend's onboarding endpoints."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from pathwise.modules.onboarding.interface import AuthContext
from pathwise.modules.onboarding.schemas import (
    CompleteOnboardingRequest,
    CompletionResult,
    OnboardingResponse,
    OnboardingStatus,
    STEP_MODELS,
    StepData,
    UpdatePreferencesRequest,
    UpdatePreferencesResult,
)
from pathwise.shared.config import Settings, get_settings
from pathwise.shared.exceptions import (
    ApiConnectionError,
    ApiError,
    AuthenticationError,
    ConfigurationError,
    OnboardingNotFoundError,
    PersistenceError,
    SubmissionError,
)

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"


def get_error_message(response: httpx.Response, fallback: str) -> str:
    """Pull the backend's {message} out of an error response."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, dict):
            message = message.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return fallback


def _unwrap(body: Any) -> Any:
    """Strip the {success, data} envelope some endpoints use."""
    if isinstance(body, dict) and "data" in body and "success" in body:
        return body["data"]
    return body


class OnboardingApiClient:
    """Onboarding API client.

    Every request carries the bearer token from the injected AuthContext.
    Errors come back as ApiError subclasses carrying a displayable message.
    """

    def __init__(
        self,
        auth: AuthContext,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._auth = auth
        self._settings = settings or get_settings()
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._settings.api_root

    async def get_status(self) -> OnboardingStatus:
        """Get onboarding progress.

        Raises:
            OnboardingNotFoundError: If no session exists yet (404)
            ApiError: For any other failure
        """
        response = await self._request("GET", "/onboarding")
        if response.status_code == 404:
            raise OnboardingNotFoundError()
        self._raise_for_status(response, "Failed to load onboarding data")
        return self._parse(OnboardingStatus, response, "Failed to load onboarding data")

    async def save_step(self, step: int, data: StepData) -> None:
        """Persist one step's payload.

        Raises:
            PersistenceError: If the backend rejects the save
        """
        model = STEP_MODELS.get(step)
        if model is None or not isinstance(data, model):
            raise TypeError(f"Payload {type(data).__name__} does not belong to step {step}")

        try:
            response = await self._request(
                "PATCH", f"/onboarding/step/{step}", json=data.to_payload()
            )
        except ApiConnectionError as e:
            raise PersistenceError(step, "Unable to save. Please try again.") from e

        if response.is_error:
            raise PersistenceError(
                step,
                get_error_message(response, "Failed to save selection"),
                status_code=response.status_code,
            )
        logger.debug(f"Saved onboarding step {step}")

    async def complete_onboarding(
        self, request: CompleteOnboardingRequest
    ) -> CompletionResult:
        """Complete onboarding and trigger roadmap generation.

        Raises:
            SubmissionError: If generation fails
        """
        response = await self._submit(
            "POST", "/onboarding/complete", request, "Failed to generate your learning path"
        )
        return self._parse(CompletionResult, response, "Failed to generate your learning path")

    async def update_preferences(
        self, request: UpdatePreferencesRequest
    ) -> UpdatePreferencesResult:
        """Replace stored preferences and regenerate the roadmap.

        Raises:
            SubmissionError: If the update fails
        """
        response = await self._submit(
            "PUT", "/onboarding/preferences", request, "Failed to update preferences"
        )
        return self._parse(UpdatePreferencesResult, response, "Failed to update preferences")

    async def get_current_preferences(self) -> OnboardingResponse | None:
        """Get stored preferences, None when the user never started onboarding."""
        try:
            status = await self.get_status()
        except OnboardingNotFoundError:
            return None
        return status.response

    async def _submit(
        self,
        method: str,
        path: str,
        request: CompleteOnboardingRequest,
        fallback: str,
    ) -> httpx.Response:
        try:
            response = await self._request(method, path, json=request.to_payload())
        except ApiConnectionError as e:
            raise SubmissionError(e.message) from e
        if response.is_error:
            raise SubmissionError(
                get_error_message(response, fallback),
                status_code=response.status_code,
            )
        return response

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        if not self._auth.is_authenticated:
            raise AuthenticationError()

        headers = {
            **self._auth.authorization_header,
            "Content-Type": "application/json",
        }
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._settings.api_timeout_seconds,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, path, json=json, headers=headers)
            except httpx.HTTPError as e:
                logger.warning(f"{method} {path} failed: {e.__class__.__name__}: {e}")
                raise ApiConnectionError(str(e)) from e

        if response.status_code == 401:
            raise AuthenticationError(
                get_error_message(response, "Your session has expired. Please log in again.")
            )
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response, fallback: str) -> None:
        if response.is_error:
            raise ApiError(
                get_error_message(response, fallback),
                status_code=response.status_code,
            )

    @staticmethod
    def _parse(model: type, response: httpx.Response, fallback: str):
        try:
            return model.model_validate(_unwrap(response.json()))
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Unexpected response body from {response.request.url.path}: {e}")
            raise ApiError(fallback, status_code=response.status_code) from e


def create_onboarding_client(
    auth: AuthContext,
    settings: Settings | None = None,
) -> OnboardingApiClient:
    """Build a client for the configured backend.

    Raises:
        ConfigurationError: If the base URL is not an http(s) URL
    """
    settings = settings or get_settings()
    if not settings.api_root.startswith(("http://", "https://")):
        raise ConfigurationError(
            f"PATHWISE_API_BASE_URL must be an http(s) URL, got {settings.api_base_url!r}"
        )
    return OnboardingApiClient(auth=auth, settings=settings)
