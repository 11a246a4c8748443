"""Interactive shell."""

import logging
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from papersh.commands.base import ShellEnv
from papersh.commands.parser import parse_command_line
from papersh.commands.pipeline import render_output, run_chain
from papersh.commands.registry import CommandRegistry, default_registry
from papersh.config import Settings
from papersh.console import ConsoleUI
from papersh.database.repository import PaperStore
from papersh.errors import ExitRequested, PaperShellError, StateStoreError

logger = logging.getLogger(__name__)

PROMPT = ">> "


class PaperShell:
    """REPL application for papersh."""

    def __init__(
        self,
        settings: Settings,
        store: PaperStore,
        ui: Optional[ConsoleUI] = None,
        registry: Optional[CommandRegistry] = None,
        env: Optional[ShellEnv] = None,
    ):
        """Initialize shell.

        Args:
            settings: Application settings
            store: Papers and filter history, mutated by commands
            ui: Console for output and prompts
            registry: Command table (every built-in command if omitted)
            env: Execution environment handed to commands
        """
        self.settings = settings
        self.store = store
        self.ui = ui or ConsoleUI()
        self.registry = registry or default_registry()
        self.env = env or ShellEnv(settings=settings, ui=self.ui)
        if self.env.registry is None:
            self.env.registry = self.registry

    def execute(self, line: str) -> str:
        """Run one command line and return the rendered result.

        Raises:
            PaperShellError: Parsing or any stage of the chain failed
            ExitRequested: The line ran ``exit``
        """
        chain = parse_command_line(line)
        output = run_chain(chain, self.store, self.env, self.registry)
        return render_output(output, self.store, self.env)

    def run(self) -> None:
        """Read and execute lines until ``exit`` or end of input."""
        session: PromptSession = PromptSession(
            history=FileHistory(str(self.settings.history_path))
        )
        while True:
            try:
                line = session.prompt(PROMPT)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break

            try:
                self.ui.print(self.execute(line))
            except ExitRequested:
                break
            except PaperShellError as e:
                self.ui.error(str(e))
            except KeyboardInterrupt:
                self.ui.warning("Interrupted.")
            except Exception as e:
                logger.exception("Command failed: %s", line)
                self.ui.error(f"{type(e).__name__}: {e}")

    def teardown(self) -> bool:
        """Persist the store. Returns False if it could not be written."""
        try:
            self.store.store(self.settings.state_path)
        except StateStoreError as e:
            self.ui.error(str(e))
            return False
        return True
