"""``cd``-style navigation over a stack of filter pieces.

``FilterHistory`` keeps the pieces in a flat list indexed from the root.
Going to the parent only moves the cursor, and a later ``Add`` overwrites
whatever was stored at the next depth, so an abandoned path is discarded
like the redo stack of an editor rather than kept as a branch.
"""

from dataclasses import dataclass, field
from typing import Sequence, Union

from papersh.models.filter import PaperFilter


@dataclass(frozen=True)
class Add:
    """``cd <filter>``: descend with an extra filter piece."""

    piece: PaperFilter


@dataclass(frozen=True)
class Here:
    """``cd .``: descend with an empty piece."""


@dataclass(frozen=True)
class Parent:
    """``cd ..``: go up one level (stays at the root)."""


@dataclass(frozen=True)
class Reset:
    """``cd``: go to the root."""


@dataclass(frozen=True)
class Prev:
    """``cd -``: swap with the previously visited level."""


FilterInstruction = Union[Add, Here, Parent, Reset, Prev]

_SPECIAL_ARGS: dict[str, FilterInstruction] = {
    ".": Here(),
    "..": Parent(),
    "-": Prev(),
}


def resolve_instruction(
    args: Sequence[str],
    reset_if_empty: bool,
    case_insensitive: bool = False,
) -> FilterInstruction:
    """Interpret ``cd``/``ls`` arguments (command name removed).

    Args:
        args: Filter arguments
        reset_if_empty: Return ``Reset`` instead of ``Here`` for no arguments
        case_insensitive: Compile patterns with ``re.IGNORECASE``

    Raises:
        FilterBuildFailed: If a pattern is not a valid regular expression
    """
    if not args:
        return Reset() if reset_if_empty else Here()
    if len(args) == 1 and args[0] in _SPECIAL_ARGS:
        return _SPECIAL_ARGS[args[0]]
    return Add(PaperFilter.from_args(args, case_insensitive))


@dataclass
class FilterHistory:
    """Filter pieces from the root (index 0, always empty) to the deepest level.

    ``current`` and ``previous`` are always valid indices into ``history``.
    """

    history: list[PaperFilter] = field(default_factory=lambda: [PaperFilter()])
    current: int = 0
    previous: int = 0

    def current_filter(self) -> PaperFilter:
        """Merge the pieces from the root down to the current level."""
        return PaperFilter.merge(self.history[: self.current + 1])

    def record(self, instruction: FilterInstruction) -> PaperFilter:
        """Apply *instruction* and return the resulting effective filter."""
        if isinstance(instruction, (Add, Here)):
            piece = instruction.piece if isinstance(instruction, Add) else PaperFilter()
            self.previous = self.current
            self.current += 1
            if self.current == len(self.history):
                self.history.append(piece)
            else:
                self.history[self.current] = piece
        elif isinstance(instruction, Parent):
            self.previous = self.current
            self.current = max(self.current - 1, 0)
        elif isinstance(instruction, Reset):
            self.previous = self.current
            self.current = 0
        elif isinstance(instruction, Prev):
            self.current, self.previous = self.previous, self.current
        else:
            raise TypeError(f"Unknown filter instruction: {instruction!r}")

        return self.current_filter()

    def observe(self, instruction: FilterInstruction) -> PaperFilter:
        """Return the filter ``record`` would produce, without changing state."""
        # Pieces are immutable, so a shallow copy of the list is enough.
        scratch = FilterHistory(list(self.history), self.current, self.previous)
        return scratch.record(instruction)
