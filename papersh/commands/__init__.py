"""Shell commands, their parser, and the pipeline that chains them."""

from papersh.commands.base import (
    Command,
    CommandInput,
    CommandOutput,
    Message,
    NoOutput,
    Selection,
    ShellEnv,
)
from papersh.commands.parser import parse_command_line
from papersh.commands.pipeline import render_output, run_chain
from papersh.commands.registry import CommandRegistry, default_registry

__all__ = [
    "Command",
    "CommandInput",
    "CommandOutput",
    "CommandRegistry",
    "Message",
    "NoOutput",
    "Selection",
    "ShellEnv",
    "default_registry",
    "parse_command_line",
    "render_output",
    "run_chain",
]
