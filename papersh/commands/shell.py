"""``man`` and ``exit``."""

from papersh.commands.base import Command, CommandInput, CommandOutput, Message, ShellEnv
from papersh.commands.navigation import FILTER_HELP
from papersh.database.repository import PaperStore
from papersh.errors import ExitRequested, ManInvalidArgument, ManUnknownSubject

FILTER_SUBJECT = "filter"


def man(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    """Show the command overview, or the manual of one subject."""
    from papersh.commands.registry import default_registry

    registry = env.registry if env.registry is not None else default_registry()
    args = cmd_input.args[1:]

    if len(args) > 1:
        raise ManInvalidArgument()

    if not args:
        width = max(len(c.name) for c in registry)
        lines = ["Commands:"]
        lines.extend(f"  {c.name:<{width}}  {c.summary}" for c in registry)
        lines.append("")
        lines.append(f"Try `man <command>` or `man {FILTER_SUBJECT}` for details.")
        return Message("\n".join(lines) + "\n")

    subject = args[0]
    if subject == FILTER_SUBJECT:
        return Message(FILTER_HELP)
    command = registry.get(subject)
    if command is None:
        raise ManUnknownSubject(subject)
    return Message(command.usage)


def exit_shell(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    raise ExitRequested()


COMMANDS = [
    Command(
        name="man",
        execute=man,
        summary="Show manuals.",
        usage="""\
Usage: man [subject]

Without a subject, list all commands. Subjects are command names and
`filter`, which explains the filter syntax shared by most commands.
""",
    ),
    Command(
        name="exit",
        execute=exit_shell,
        summary="Save and quit.",
        usage="Usage: exit\n\nSave the paperbase and leave the shell. Ctrl-D does the same.\n",
    ),
]
