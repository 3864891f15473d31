"""Prompt Utilities - Rich prompts run off the event loop.

Prompts block on stdin, so they run in a worker thread. That keeps the
event loop free while the user types and lets debounced auto-saves fire
in the background.
"""

import asyncio
from typing import List, Optional, Protocol, Tuple

from rich.console import Console
from rich.prompt import Confirm, Prompt

console = Console()


class Prompter(Protocol):
    """Source of user answers for the interactive wizard."""

    async def ask(self, prompt: str, default: Optional[str] = None) -> str:
        ...

    async def confirm(self, prompt: str, default: bool = True) -> bool:
        ...


class RichPrompter:
    """Prompter backed by rich prompts on the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    async def ask(self, prompt: str, default: Optional[str] = None) -> str:
        if default is None:
            return await asyncio.to_thread(Prompt.ask, prompt, console=self._console)
        return await asyncio.to_thread(
            Prompt.ask, prompt, console=self._console, default=default
        )

    async def confirm(self, prompt: str, default: bool = True) -> bool:
        return await asyncio.to_thread(
            Confirm.ask, prompt, console=self._console, default=default
        )


def render_menu(
    title: str,
    options: List[Tuple[str, str]],
) -> None:
    """Print a keyed menu.

    Args:
        title: Menu title
        options: List of (key, description) tuples
    """
    console.print(f"\n[bold]{title}[/bold]")
    for key, description in options:
        console.print(f"  \\[{key}] {description}")


def parse_selection(raw: str, count: int) -> List[int]:
    """Parse "1 3,4" style input into zero-based indexes.

    Out-of-range and non-numeric entries are ignored.
    """
    indexes: List[int] = []
    for part in raw.replace(",", " ").split():
        if part.isdigit():
            index = int(part) - 1
            if 0 <= index < count and index not in indexes:
                indexes.append(index)
    return indexes
