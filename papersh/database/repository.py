"""Paper store: the in-memory paper list plus YAML persistence."""

import logging
import pprint
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

import yaml

from papersh.errors import StateLoadError, StateStoreError
from papersh.models.filter import PaperFilter
from papersh.models.navigation import FilterHistory
from papersh.models.paper import Paper

logger = logging.getLogger(__name__)


class PaperStore:
    """Owns the papers and the filter navigation history.

    Papers are addressed by their index in ``papers``; commands pass
    selections around as lists of indices.
    """

    def __init__(
        self,
        papers: Optional[list[Paper]] = None,
        filters: Optional[FilterHistory] = None,
    ):
        self.papers: list[Paper] = papers if papers is not None else []
        self.filters = filters or FilterHistory()

    def __len__(self) -> int:
        return len(self.papers)

    def __getitem__(self, index: int) -> Paper:
        return self.papers[index]

    # ── Queries / mutations ───────────────────────────────────────────

    def select(self, paper_filter: PaperFilter) -> list[int]:
        """Return indices of papers matching *paper_filter*, in store order."""
        return [i for i, paper in enumerate(self.papers) if paper_filter.matches(paper)]

    def add(self, paper: Paper) -> int:
        """Append *paper* and return its index."""
        self.papers.append(paper)
        return len(self.papers) - 1

    def remove(self, indices: Iterable[int]) -> int:
        """Remove papers by index.

        Returns:
            Number of papers removed
        """
        unique = sorted(set(indices), reverse=True)
        for index in unique:
            del self.papers[index]
        return len(unique)

    # ── Persistence ───────────────────────────────────────────────────

    @classmethod
    def load(cls, path: Path) -> "PaperStore":
        """Load papers from a YAML file; a missing file yields an empty store.

        Raises:
            StateLoadError: The file exists but cannot be read or decoded
        """
        path = Path(path).expanduser()
        if not path.exists():
            logger.info("No paper metadata at %s, starting empty", path)
            return cls()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise StateLoadError(path, e) from e

        if data is None:
            data = []
        if not isinstance(data, list):
            raise StateLoadError(path, ValueError("expected a list of papers"))
        try:
            papers = [Paper.from_dict(entry) for entry in data]
        except (KeyError, TypeError, ValueError) as e:
            raise StateLoadError(path, e) from e

        logger.info("Loaded %d papers from %s", len(papers), path)
        return cls(papers)

    def store(self, path: Path, fallback: Optional[TextIO] = None) -> None:
        """Write papers to a YAML file.

        On failure the records are dumped to *fallback* (stderr by default)
        so they are not silently lost, and the error is re-raised.

        Raises:
            StateStoreError: The file could not be written
        """
        path = Path(path).expanduser()
        records = [paper.to_dict() for paper in self.papers]
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                yaml.dump(
                    records,
                    f,
                    default_flow_style=False,
                    allow_unicode=True,
                    sort_keys=False,
                )
        except (OSError, yaml.YAMLError) as e:
            out = fallback or sys.stderr
            out.write(f"Failed to store paper metadata to '{path}'. Dumping:\n")
            out.write(pprint.pformat(records) + "\n")
            raise StateStoreError(path, e) from e

        logger.info("Stored %d papers to %s", len(records), path)
