"""Types shared by the command executors and the pipeline."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional, Union

from papersh.config import Settings
from papersh.console import ConsoleUI
from papersh.services.process_service import ProcessService

if TYPE_CHECKING:
    from papersh.commands.registry import CommandRegistry
    from papersh.database.repository import PaperStore
    from papersh.services.scraper_service import ScraperService


# ---------------------------------------------------------------------------
# Command output: a closed set of variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NoOutput:
    """The command produced nothing to show or pipe."""


@dataclass(frozen=True)
class Selection:
    """Ordered paper indices into the store."""

    indices: tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.indices)


@dataclass(frozen=True)
class Message:
    """Text for the user."""

    text: str


CommandOutput = Union[NoOutput, Selection, Message]


@dataclass(frozen=True)
class CommandInput:
    """Arguments of one pipe segment (``args[0]`` is the command name)
    and the selection piped in from the previous segment, if any."""

    args: list[str]
    selection: Optional[Selection] = None

    @classmethod
    def from_output(cls, args: list[str], output: CommandOutput) -> "CommandInput":
        """Feed the previous segment's output into the next one."""
        if isinstance(output, Selection):
            return cls(args, output)
        if isinstance(output, (NoOutput, Message)):
            return cls(args, None)
        raise TypeError(f"Unknown command output: {output!r}")


# ---------------------------------------------------------------------------
# Execution environment
# ---------------------------------------------------------------------------

@dataclass
class ShellEnv:
    """Everything besides the store that executors may need."""

    settings: Settings
    ui: ConsoleUI
    processes: ProcessService = field(default_factory=ProcessService)
    scraper: Optional["ScraperService"] = None
    registry: Optional["CommandRegistry"] = None


Executor = Callable[[CommandInput, "PaperStore", ShellEnv], CommandOutput]


@dataclass(frozen=True)
class Command:
    """A registered command: its executor plus help text for ``man``."""

    name: str
    execute: Executor
    summary: str
    usage: str
