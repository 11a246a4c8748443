"""Command name → executor lookup."""

from typing import Iterable, Iterator, Optional

from papersh.commands.base import Command
from papersh.errors import UnknownCommand


class CommandRegistry:
    """A fixed table of commands, built once and handed to the pipeline."""

    def __init__(self, commands: Iterable[Command]):
        self._commands: dict[str, Command] = {}
        for command in commands:
            if command.name in self._commands:
                raise ValueError(f"Command '{command.name}' registered twice")
            self._commands[command.name] = command

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[Command]:
        return iter(sorted(self._commands.values(), key=lambda c: c.name))

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    def resolve(self, name: str) -> Command:
        """Exact-match lookup.

        Raises:
            UnknownCommand: If no command has that name
        """
        command = self._commands.get(name)
        if command is None:
            raise UnknownCommand(name)
        return command


def default_registry() -> CommandRegistry:
    """Registry with every built-in command."""
    from papersh.commands import curl, navigation, papers, shell, viewers

    return CommandRegistry(
        [
            *navigation.COMMANDS,
            *papers.COMMANDS,
            *viewers.COMMANDS,
            *curl.COMMANDS,
            *shell.COMMANDS,
        ]
    )
