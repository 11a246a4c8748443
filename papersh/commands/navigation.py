"""``ls``, ``cd`` and ``pwd``: filtering and filter navigation."""

from papersh.commands.base import (
    Command,
    CommandInput,
    CommandOutput,
    Message,
    NoOutput,
    Selection,
    ShellEnv,
)
from papersh.database.repository import PaperStore
from papersh.models.navigation import resolve_instruction


def ls(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    """List papers matching the current filter plus the given one.

    The navigation history is only observed, never changed.
    """
    instruction = resolve_instruction(
        cmd_input.args[1:],
        reset_if_empty=False,
        case_insensitive=env.settings.case_insensitive,
    )
    paper_filter = store.filters.observe(instruction)
    return Selection(tuple(store.select(paper_filter)))


def cd(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    instruction = resolve_instruction(
        cmd_input.args[1:],
        reset_if_empty=True,
        case_insensitive=env.settings.case_insensitive,
    )
    store.filters.record(instruction)
    return NoOutput()


def pwd(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    return Message(f"{store.filters.current_filter()}\n")


def piped_or_listed(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> Selection:
    """Papers given through the pipe, or else what ``ls`` with the same
    arguments would list. This makes ``ls X | cmd`` equivalent to ``cmd X``.
    """
    if cmd_input.selection is not None:
        return cmd_input.selection
    output = ls(cmd_input, store, env)
    assert isinstance(output, Selection), "ls always outputs a selection"
    return output


FILTER_HELP = """\
Filters select papers with regular expressions, one per field:

  <pattern>        title
  as <pattern>     nickname
  by <pattern>     any author
  by1 <pattern>    first author
  at/on <pattern>  venue
  in <pattern>     year
  is <pattern>     has a matching label
  not <pattern>    has no matching label

All patterns must match. Quote patterns that contain spaces or pipes,
e.g. ls 'shadow|tutor' by Chung in '20(19|20)'.
"""

COMMANDS = [
    Command(
        name="ls",
        execute=ls,
        summary="List papers matching the current filter and arguments.",
        usage=f"""\
Usage: ls [filter]

List papers that match the current filter (see `cd`) narrowed by the
given filter. `ls ..` and `ls -` preview what `cd ..` and `cd -` would
show without moving.

{FILTER_HELP}""",
    ),
    Command(
        name="cd",
        execute=cd,
        summary="Narrow or navigate the current filter.",
        usage="""\
Usage: cd [filter | . | .. | -]

  cd <filter>   add the filter on top of the current one
  cd .          stay, but record a step (so `cd -` returns here)
  cd ..         drop the most recent filter step
  cd -          go back to the previous filter
  cd            clear all filters
""",
    ),
    Command(
        name="pwd",
        execute=pwd,
        summary="Show the current filter.",
        usage="Usage: pwd\n\nPrint the filter currently applied by `cd`.\n",
    ),
]
