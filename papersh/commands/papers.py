"""Commands that create, change, remove, and count papers."""

from papersh.commands.base import (
    Command,
    CommandInput,
    CommandOutput,
    Message,
    Selection,
    ShellEnv,
)
from papersh.commands.navigation import piped_or_listed
from papersh.database.repository import PaperStore
from papersh.errors import NoPapersGiven, PaperMissingFields, PathDoesNotExist
from papersh.models.paper import Paper, PaperUpdate
from papersh.utils.text import expand_path, split_authors


def touch(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    paper = Paper.from_args(cmd_input.args[1:])

    filepath = paper.abs_filepath(env.settings.file_dir)
    if filepath is not None and not filepath.exists():
        raise PathDoesNotExist(filepath)

    return Selection((store.add(paper),))


def rm(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    selection = piped_or_listed(cmd_input, store, env)

    count = len(selection)
    if count > 1:
        env.ui.confirm(f"Remove {count} papers?", default=False)

    removed = store.remove(selection.indices)
    return Message(f"Removed {removed} papers.\n")


def set_fields(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    if cmd_input.selection is None:
        raise NoPapersGiven()

    # Parse once so a bad argument changes no paper at all.
    update = PaperUpdate.from_args(cmd_input.args[1:])
    if update.dangling:
        raise PaperMissingFields([f"value for '{kw}'" for kw in update.dangling])
    if "authors" in update.fields and not split_authors(update.fields["authors"]):
        raise PaperMissingFields(["authors(by)"])
    if "filepath" in update.fields:
        filepath = expand_path(update.fields["filepath"], env.settings.file_dir)
        if not filepath.exists():
            raise PathDoesNotExist(filepath)

    for index in cmd_input.selection.indices:
        store[index].apply(update)
    return cmd_input.selection


def read(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    selection = piped_or_listed(cmd_input, store, env)
    for index in selection.indices:
        store[index].mark_read()
    return selection


def wc(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    selection = piped_or_listed(cmd_input, store, env)
    return Message(f"{len(selection)} papers.\n")


_PIPE_OR_FILTER = """\
When a paper list is given via pipe, all arguments are ignored.
Otherwise the arguments are a filter on top of the current one,
so `ls X | {name}` is equivalent to `{name} X`.
"""

COMMANDS = [
    Command(
        name="touch",
        execute=touch,
        summary="Add a new paper.",
        usage="""\
Usage: touch <paper>

Add a new paper. Fields are given like filters:

  <title>       title (required)
  by <authors>  comma-separated authors (required)
  at <venue>    venue (required; `on` works too)
  in <year>     year (required)
  as <nick>     nickname
  @ <path>      paper file, relative to the file directory
  is <label>    label (repeatable)

For instance:

  touch 'Reason: A Cool New System' by 'Jae-Won Chung, Chaehyun Jeong'
        at OSDI in 2022 as Reason @ ~/papers/reason.pdf
""",
    ),
    Command(
        name="rm",
        execute=rm,
        summary="Remove papers.",
        usage="Usage:\n1) alone: rm [filter]\n2) pipe:  [paper list] | rm\n\n"
        "Remove papers from the paperbase. Asks for confirmation\n"
        "when more than one paper would be removed.\n\n"
        + _PIPE_OR_FILTER.format(name="rm"),
    ),
    Command(
        name="set",
        execute=set_fields,
        summary="Change fields of piped papers.",
        usage="""\
Usage: [paper list] | set <fields>

Change the fields of every piped paper. Fields are given as in
`touch`; additionally `is <label>` adds a label and `not <label>`
removes one. For instance:

  ls as Reason | set in 2023 is read-later not draft
""",
    ),
    Command(
        name="read",
        execute=read,
        summary="Mark papers as read.",
        usage="Usage:\n1) alone: read [filter]\n2) pipe:  [paper list] | read\n\n"
        "Record that the papers were read; the `state` column shows it.\n\n"
        + _PIPE_OR_FILTER.format(name="read"),
    ),
    Command(
        name="wc",
        execute=wc,
        summary="Count papers.",
        usage="Usage:\n1) alone: wc [filter]\n2) pipe:  [paper list] | wc\n\n"
        "Print the number of papers.\n\n"
        + _PIPE_OR_FILTER.format(name="wc"),
    ),
]
