"""Interactive region picker for the terminal."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape
from rich.prompt import IntPrompt

logger = logging.getLogger(__name__)


class RichPrompter:
    """Show a numbered list of choices and read the number of the one to use.

    Input is read on the calling thread so Ctrl-C interrupts the prompt.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    async def __call__(self, choices: list[str], message: str) -> str | None:
        if not choices:
            return None
        return self._ask(choices, message)

    def _ask(self, choices: list[str], message: str) -> str | None:
        for index, label in enumerate(choices, start=1):
            self.console.print(f"  [bold cyan]{index:>3}[/] {escape(label)}", highlight=False)
        try:
            answer = IntPrompt.ask(
                f"[bold]?[/] {message}",
                console=self.console,
                choices=[str(i) for i in range(1, len(choices) + 1)],
                show_choices=False,
            )
        except EOFError:
            logger.debug("Prompt closed without an answer")
            return None
        return choices[answer - 1]
