"""CLI State Management - Token storage and session state."""

import json
import os
import stat
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from pathwise.modules.onboarding.interface import AuthContext
from pathwise.shared.config import get_settings


@dataclass
class CLIState:
    """Current CLI session state."""

    access_token: Optional[str] = None
    saved_at: Optional[datetime] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)


class StateManager:
    """Manages CLI state persistence."""

    def __init__(self, config_dir: Path | None = None) -> None:
        self._config_dir = config_dir or self._get_config_dir()
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._state_file = self._config_dir / "state.json"
        self._state: Optional[CLIState] = None

    @property
    def state_file(self) -> Path:
        return self._state_file

    def _get_config_dir(self) -> Path:
        """Get the configuration directory for the CLI."""
        if os.name == "nt":  # Windows
            base = Path(os.environ.get("APPDATA", Path.home()))
        else:  # Unix-like
            base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
        return base / "pathwise"

    def load(self) -> CLIState:
        """Load state from disk."""
        if self._state is not None:
            return self._state

        if not self._state_file.exists():
            self._state = CLIState()
            return self._state

        try:
            data = json.loads(self._state_file.read_text())
            self._state = CLIState(
                access_token=data.get("access_token"),
                saved_at=(
                    datetime.fromisoformat(data["saved_at"])
                    if data.get("saved_at")
                    else None
                ),
            )
        except (json.JSONDecodeError, KeyError, ValueError):
            self._state = CLIState()

        return self._state

    def save(self, state: CLIState) -> None:
        """Save state to disk with restricted permissions.

        The state file holds the bearer token and is written with mode 0600
        on Unix systems.
        """
        self._state = state
        data = {
            "access_token": state.access_token,
            "saved_at": state.saved_at.isoformat() if state.saved_at else None,
        }
        content = json.dumps(data, indent=2)

        if os.name == "nt":
            # No chmod equivalent, the file lives in the user's AppData
            self._state_file.write_text(content)
            return

        temp_file = self._state_file.with_suffix(".tmp")
        if temp_file.exists():
            temp_file.unlink()
        fd = os.open(
            str(temp_file),
            os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
            stat.S_IRUSR | stat.S_IWUSR,
        )
        try:
            os.write(fd, content.encode("utf-8"))
        finally:
            os.close(fd)
        temp_file.replace(self._state_file)

    def clear(self) -> None:
        """Clear all state (logout)."""
        self._state = CLIState()
        if self._state_file.exists():
            self._state_file.unlink()

    def update_token(self, access_token: str) -> None:
        state = self.load()
        state.access_token = access_token
        state.saved_at = datetime.now(timezone.utc)
        self.save(state)


# Singleton instance
_state_manager: Optional[StateManager] = None


def get_state_manager() -> StateManager:
    """Get state manager singleton."""
    global _state_manager
    if _state_manager is None:
        _state_manager = StateManager()
    return _state_manager


def get_auth_context() -> AuthContext:
    """Build the auth context for this invocation.

    PATHWISE_API_TOKEN wins over the token stored by 'pathwise auth login'.
    """
    token = get_settings().api_token or get_state_manager().load().access_token
    return AuthContext(access_token=token)


def require_auth() -> AuthContext:
    """Require a credential and return it.

    Raises:
        typer.Exit: If no token is available
    """
    auth = get_auth_context()
    if not auth.is_authenticated:
        Console().print(
            "[red]Error:[/red] Not authenticated. Please run 'pathwise auth login' first."
        )
        raise typer.Exit(1)
    return auth
