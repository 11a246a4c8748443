"""Paper data model."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Literal, Optional

from papersh.errors import NoteError, PaperDuplicateField, PaperMissingFields
from papersh.utils.text import as_filename, expand_path, split_authors

STATUS_TIME_FORMAT = "%Y-%m-%d %I:%M:%S %p"

# Keyword → field for scalar fields given on the command line.
# A bare (keyword-less) argument is the title.
FIELD_KEYWORDS: dict[str, str] = {
    "as": "nickname",
    "by": "authors",
    "at": "venue",
    "on": "venue",
    "in": "year",
    "@": "filepath",
}
LABEL_ADD_KEYWORD = "is"
LABEL_REMOVE_KEYWORD = "not"
REQUIRED_FIELDS = (("title", "_"), ("authors", "by"), ("venue", "at"), ("year", "in"))

# Column names understood by ``Paper.field_as_string`` and the table renderer
COLUMNS = (
    "title",
    "nickname",
    "authors",
    "first-author",
    "venue",
    "year",
    "labels",
    "state",
)


@dataclass
class PaperStatus:
    """One entry of a paper's management history."""

    kind: Literal["added", "read"] = "added"
    at: str = field(default_factory=lambda: datetime.now().strftime(STATUS_TIME_FORMAT))

    @classmethod
    def read(cls) -> "PaperStatus":
        return cls(kind="read")

    def __str__(self) -> str:
        if self.kind == "read":
            return f"READ  {self.at}"
        return f"ADDED {self.at}"


@dataclass
class PaperUpdate:
    """Field values parsed from command arguments, not yet applied."""

    fields: dict[str, str] = field(default_factory=dict)
    add_labels: list[str] = field(default_factory=list)
    remove_labels: list[str] = field(default_factory=list)
    # Keywords that were given without a value
    dangling: list[str] = field(default_factory=list)

    @classmethod
    def from_args(cls, args: list[str], allow_label_removal: bool = True) -> "PaperUpdate":
        """Parse ``title as NICK by 'A, B' at VENUE in YEAR @ PATH is LABEL``.

        Args:
            args: Arguments with the command name already removed
            allow_label_removal: Whether ``not`` is accepted as a keyword

        Raises:
            PaperDuplicateField: If a scalar field is given twice
        """
        update = cls()
        seen: set[str] = set()
        arg_iter = iter(args)
        for arg in arg_iter:
            if arg in FIELD_KEYWORDS or arg == LABEL_ADD_KEYWORD or (
                allow_label_removal and arg == LABEL_REMOVE_KEYWORD
            ):
                value = next(arg_iter, None)
                if value is None:
                    update.dangling.append(arg)
                    continue
                if arg == LABEL_ADD_KEYWORD:
                    update.add_labels.append(value)
                elif arg == LABEL_REMOVE_KEYWORD:
                    update.remove_labels.append(value)
                else:
                    name = FIELD_KEYWORDS[arg]
                    if name in seen:
                        raise PaperDuplicateField(arg)
                    seen.add(name)
                    update.fields[name] = value
            else:
                if "title" in seen:
                    raise PaperDuplicateField("title")
                seen.add("title")
                update.fields["title"] = arg
        return update


@dataclass
class Paper:
    """A single bibliography record."""

    title: str
    authors: list[str]
    venue: str
    year: str
    nickname: Optional[str] = None
    filepath: Optional[str] = None
    labels: set[str] = field(default_factory=set)
    notepath: Optional[str] = None
    state: list[PaperStatus] = field(default_factory=lambda: [PaperStatus()])

    # ── Construction from the command line ────────────────────────────

    @classmethod
    def from_args(cls, args: list[str]) -> "Paper":
        """Build a paper from ``touch`` arguments.

        Authors are given as one comma-separated argument. Title, authors,
        venue, and year are required.

        Raises:
            PaperDuplicateField: A keyword was repeated
            PaperMissingFields: A required field was not given
        """
        update = PaperUpdate.from_args(args, allow_label_removal=False)
        missing = [
            f"{name}({keyword})"
            for name, keyword in REQUIRED_FIELDS
            if name not in update.fields
        ]
        if missing:
            raise PaperMissingFields(missing)

        paper = cls(
            title=update.fields["title"],
            authors=split_authors(update.fields["authors"]),
            venue=update.fields["venue"],
            year=update.fields["year"],
            nickname=update.fields.get("nickname"),
            filepath=update.fields.get("filepath"),
            labels=set(update.add_labels),
        )
        if not paper.authors:
            raise PaperMissingFields(["authors(by)"])
        return paper

    def apply(self, update: PaperUpdate) -> None:
        """Apply parsed field changes in place (used by ``set``)."""
        for name, value in update.fields.items():
            if name == "authors":
                authors = split_authors(value)
                if authors:
                    self.authors = authors
            else:
                setattr(self, name, value)
        self.labels.update(update.add_labels)
        self.labels.difference_update(update.remove_labels)

    def mark_read(self) -> None:
        self.state.append(PaperStatus.read())

    # ── Paths ─────────────────────────────────────────────────────────

    def abs_filepath(self, file_dir: Path) -> Optional[Path]:
        """Return the paper file path, resolved against *file_dir*."""
        if not self.filepath:
            return None
        return expand_path(self.filepath, file_dir)

    def abs_notepath(self, note_dir: Path) -> Optional[Path]:
        """Return the note file path, resolved against *note_dir*."""
        if not self.notepath:
            return None
        return expand_path(self.notepath, note_dir)

    def ensure_note(self, note_dir: Path) -> Path:
        """Return the note path, creating an empty note if there is none.

        New notes are named after the title and start with a heading.

        Raises:
            NoteError: The note file cannot be created
        """
        note_dir = Path(note_dir).expanduser()
        path = self.abs_notepath(note_dir)
        if path is None:
            stem = as_filename(self.title)
            name = f"{stem}.md"
            counter = 2
            while (note_dir / name).exists():
                name = f"{stem}_{counter}.md"
                counter += 1
            path = note_dir / name
        else:
            name = self.notepath

        if not path.exists():
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                with open(path, "w", encoding="utf-8") as f:
                    f.write(f"# {self.title}\n\n")
            except OSError as e:
                raise NoteError(path, e) from e
        self.notepath = name
        return path

    # ── Display ───────────────────────────────────────────────────────

    @property
    def first_author(self) -> str:
        return self.authors[0]

    def field_as_string(self, column: str) -> str:
        """Render one table column for this paper."""
        if column == "title":
            return self.title
        if column == "nickname":
            return self.nickname or ""
        if column == "authors":
            return ", ".join(self.authors)
        if column == "first-author":
            return self.first_author
        if column == "venue":
            return self.venue
        if column == "year":
            return self.year
        if column == "labels":
            return ", ".join(sorted(self.labels))
        if column == "state":
            return str(self.state[-1]) if self.state else ""
        return ""

    # ── Persistence ───────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "nickname": self.nickname,
            "authors": list(self.authors),
            "venue": self.venue,
            "year": self.year,
            "filepath": self.filepath,
            "labels": sorted(self.labels),
            "notepath": self.notepath,
            "state": [{"kind": s.kind, "at": s.at} for s in self.state],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Paper":
        """Rebuild a paper from its persisted mapping.

        Raises:
            KeyError: A required field is absent
            ValueError: The author list is empty
        """
        authors = [str(a) for a in data["authors"]]
        if not authors:
            raise ValueError(f"paper '{data['title']}' has no authors")
        return cls(
            title=str(data["title"]),
            authors=authors,
            venue=str(data["venue"]),
            year=str(data["year"]),
            nickname=data.get("nickname"),
            filepath=data.get("filepath"),
            labels=set(data.get("labels") or []),
            notepath=data.get("notepath"),
            state=[
                PaperStatus(kind=s["kind"], at=str(s["at"]))
                for s in data.get("state") or []
            ],
        )
