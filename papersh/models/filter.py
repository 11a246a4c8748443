"""Paper filters: per-field regular expression constraints.

A ``PaperFilter`` holds zero or more compiled patterns per field. All
patterns are AND-ed: a paper matches only if it satisfies every one of
them. The same type is used for one navigation step (a filter piece) and
for the merged filter of a whole navigation path.
"""

import re
from dataclasses import dataclass, fields
from typing import Sequence

from papersh.errors import FilterBuildFailed
from papersh.models.paper import Paper

Patterns = tuple[re.Pattern, ...]

# Keyword → field. Any other argument is a title pattern.
FILTER_KEYWORDS: dict[str, str] = {
    "as": "nickname",
    "by": "author",
    "by1": "first_author",
    "at": "venue",
    "on": "venue",
    "in": "year",
    "is": "is_label",
    "not": "not_label",
}

_DISPLAY = (
    ("title", "title matches"),
    ("nickname", "nickname matches"),
    ("author", "author matches"),
    ("first_author", "first author matches"),
    ("venue", "venue matches"),
    ("year", "year matches"),
    ("is_label", "has label matching"),
    ("not_label", "has no label matching"),
)


@dataclass(frozen=True)
class PaperFilter:
    """Field-to-patterns constraints; immutable once built."""

    title: Patterns = ()
    nickname: Patterns = ()
    author: Patterns = ()
    first_author: Patterns = ()
    venue: Patterns = ()
    year: Patterns = ()
    is_label: Patterns = ()
    not_label: Patterns = ()

    # ── Construction ──────────────────────────────────────────────────

    @classmethod
    def from_args(cls, args: Sequence[str], case_insensitive: bool = False) -> "PaperFilter":
        """Compile filter arguments such as ``shadow by Chung in 2020``.

        A keyword consumes the next argument as its pattern. A keyword at
        the very end has nothing to consume and is taken as a title pattern
        itself.

        Raises:
            FilterBuildFailed: If a pattern is not a valid regular expression
        """
        flags = re.IGNORECASE if case_insensitive else 0
        collected: dict[str, list[re.Pattern]] = {f.name: [] for f in fields(cls)}

        i = 0
        while i < len(args):
            arg = args[i]
            name = FILTER_KEYWORDS.get(arg)
            if name is not None and i + 1 < len(args):
                pattern = args[i + 1]
                i += 2
            else:
                name, pattern = "title", arg
                i += 1
            collected[name].append(_compile(pattern, flags))

        return cls(**{name: tuple(patterns) for name, patterns in collected.items()})

    @classmethod
    def merge(cls, pieces: Sequence["PaperFilter"]) -> "PaperFilter":
        """Concatenate every field's patterns across *pieces*, in order."""
        merged: dict[str, list[re.Pattern]] = {f.name: [] for f in fields(cls)}
        for piece in pieces:
            for name, patterns in merged.items():
                patterns.extend(getattr(piece, name))
        return cls(**{name: tuple(patterns) for name, patterns in merged.items()})

    # ── Queries ───────────────────────────────────────────────────────

    def is_empty(self) -> bool:
        return all(not getattr(self, f.name) for f in fields(self))

    def matches(self, paper: Paper) -> bool:
        """Return True if *paper* satisfies every pattern of this filter."""
        if not all(r.search(paper.title) for r in self.title):
            return False
        if not all(r.search(paper.nickname or "") for r in self.nickname):
            return False
        if not all(any(r.search(a) for a in paper.authors) for r in self.author):
            return False
        if not all(r.search(paper.first_author) for r in self.first_author):
            return False
        if not all(r.search(paper.venue) for r in self.venue):
            return False
        if not all(r.search(paper.year) for r in self.year):
            return False
        if not all(any(r.search(label) for label in paper.labels) for r in self.is_label):
            return False
        if any(r.search(label) for r in self.not_label for label in paper.labels):
            return False
        return True

    def __str__(self) -> str:
        segments = [
            f"{label} '{pattern.pattern}'"
            for name, label in _DISPLAY
            for pattern in getattr(self, name)
        ]
        if not segments:
            return "No filter applied."
        return ", ".join(segments)


def _compile(pattern: str, flags: int) -> re.Pattern:
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise FilterBuildFailed(pattern, e) from e
