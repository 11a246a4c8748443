"""Console UI for terminal output and prompts using Rich."""

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from papersh.errors import ConfirmationDeclined
from papersh.models.paper import Paper

_HEADERS = {
    "title": "Title",
    "nickname": "Nickname",
    "authors": "Authors",
    "first-author": "First Author",
    "venue": "Venue",
    "year": "Year",
    "labels": "Labels",
    "state": "State",
}


class ConsoleUI:
    """Rich-based console UI for paper tables, notifications, and prompts."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize console.

        Args:
            console: Console to write to (a fresh stdout console if omitted)
        """
        self._console = console or Console()

    @property
    def console(self) -> Console:
        return self._console

    # ── Notifications ─────────────────────────────────────────────────

    def print(self, text: str) -> None:
        """Print command output verbatim (no markup interpretation)."""
        self._console.print(text, markup=False, highlight=False, end="")

    def info(self, message: str) -> None:
        """Print an info message."""
        self._console.print(escape(message))

    def warning(self, message: str) -> None:
        """Print a warning message in yellow."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Print an error message in red."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    # ── Prompts ───────────────────────────────────────────────────────

    def confirm(self, prompt: str, default: bool) -> None:
        """Ask a yes/no question; a "no" aborts the running command.

        Raises:
            ConfirmationDeclined: If the user answers no
        """
        if not Confirm.ask(escape(prompt), default=default, console=self._console):
            raise ConfirmationDeclined()

    def select(self, prompt: str, options: Sequence[str]) -> int:
        """Let the user pick one of *options*; returns its index."""
        self._console.print(escape(prompt))
        for number, option in enumerate(options, start=1):
            self._console.print(f"  {number}) {escape(option)}")
        choice = IntPrompt.ask(
            "Select",
            choices=[str(n) for n in range(1, len(options) + 1)],
            show_choices=False,
            console=self._console,
        )
        return choice - 1

    def ask(self, name: str, default: str = "") -> str:
        """Ask for a free-form value, falling back to *default* on empty input."""
        answer = Prompt.ask(escape(name), default=default, console=self._console)
        return (answer or default).strip()

    # ── Tables ────────────────────────────────────────────────────────

    def render_papers(self, papers: Sequence[Paper], columns: Sequence[str]) -> str:
        """Render papers as a table and return it as a string.

        Args:
            papers: Papers to display, in order
            columns: Column names from ``papersh.models.paper.COLUMNS``

        Returns:
            Rendered table, ending with a newline
        """
        table = Table()
        for column in columns:
            table.add_column(
                _HEADERS[column],
                justify="center" if column == "year" else "left",
                header_style="bold",
                overflow="fold",
            )

        for paper in papers:
            table.add_row(*(escape(paper.field_as_string(c)) for c in columns))

        with self._console.capture() as capture:
            self._console.print(table)
        return capture.get()
