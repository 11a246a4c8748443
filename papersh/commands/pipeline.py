"""Runs a parsed command line, piping each segment's output into the next."""

import logging
from typing import Sequence

from papersh.commands.base import (
    CommandInput,
    CommandOutput,
    Message,
    NoOutput,
    Selection,
    ShellEnv,
)
from papersh.commands.registry import CommandRegistry
from papersh.database.repository import PaperStore
from papersh.errors import InvalidCommand

logger = logging.getLogger(__name__)


def check_chain(chain: Sequence[Sequence[str]]) -> None:
    """Reject empty segments in a chain of more than one command.

    Raises:
        InvalidCommand: On an empty first, last, or middle segment
    """
    if len(chain) < 2:
        return
    for position, argv in enumerate(chain):
        if argv:
            continue
        if position == 0:
            raise InvalidCommand("cannot begin with a pipe.")
        if position == len(chain) - 1:
            raise InvalidCommand("cannot end with a pipe.")
        raise InvalidCommand("only one pipe character allowed between commands.")


def run_chain(
    chain: Sequence[Sequence[str]],
    store: PaperStore,
    env: ShellEnv,
    registry: CommandRegistry,
) -> CommandOutput:
    """Execute the segments left to right and return the last output.

    A failing segment aborts the chain; changes made to the store by
    earlier segments are kept.
    """
    if not chain or (len(chain) == 1 and not chain[0]):
        return NoOutput()
    check_chain(chain)

    # Resolve every name up front so a typo late in the chain runs nothing.
    commands = [registry.resolve(argv[0]) for argv in chain]

    output: CommandOutput = NoOutput()
    for position, (command, argv) in enumerate(zip(commands, chain)):
        if position == 0:
            cmd_input = CommandInput(list(argv))
        else:
            cmd_input = CommandInput.from_output(list(argv), output)
        logger.debug("Running %s with %d piped papers", argv, len(cmd_input.selection or ()))
        output = command.execute(cmd_input, store, env)
    return output


def render_output(output: CommandOutput, store: PaperStore, env: ShellEnv) -> str:
    """Turn a command's final output into text for the user."""
    if isinstance(output, NoOutput):
        return ""
    if isinstance(output, Message):
        return output.text
    if isinstance(output, Selection):
        papers = [store[i] for i in output.indices]
        return env.ui.render_papers(papers, env.settings.table_columns)
    raise TypeError(f"Unknown command output: {output!r}")
